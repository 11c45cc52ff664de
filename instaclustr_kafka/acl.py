import json
from collections.abc import Mapping
from dataclasses import asdict, astuple, dataclass, fields


@dataclass(frozen=True, kw_only=True)
class KafkaAcl:
    """Single Kafka ACL rule. Every field takes part in its identity."""

    principal: str
    host: str
    resource_type: str
    resource_name: str
    operation: str
    permission_type: str
    pattern_type: str

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "KafkaAcl":
        return cls(**{name: mapping[name] for name in FIELDS})

    def to_payload(self) -> str:
        return json.dumps(asdict(self))

    def values(self) -> tuple[str, ...]:
        return astuple(self)

    def describe(self) -> str:
        return (
            f"principal={self.principal},host={self.host},resourceType={self.resource_type},"
            f"resourceName={self.resource_name},operation={self.operation},"
            f"permissionType={self.permission_type},patternType={self.pattern_type}"
        )


FIELDS: tuple[str, ...] = tuple(f.name for f in fields(KafkaAcl))
