"""Composite resource id of a Kafka ACL.

The id is the cluster id followed by the seven ACL fields, joined with ``&``.
Values are not escaped, so a field containing ``&`` can not be decoded back.
"""

import hashlib

from instaclustr_kafka.acl import FIELDS, KafkaAcl
from instaclustr_kafka.errors import FormatError

SEPARATOR: str = "&"
ID_FORMAT: str = "<CLUSTER-ID>&<PRINCIPAL>&<HOST>&<RESOURCE-TYPE>&<RESOURCE-NAME>&<OPERATION>&<PERMISSION-TYPE>&<PATTERN-TYPE>"


def encode_id(cluster_id: str, acl: KafkaAcl) -> str:
    return SEPARATOR.join((cluster_id, *acl.values()))


def decode_id(resource_id: str) -> tuple[str, KafkaAcl]:
    parts = resource_id.split(SEPARATOR)
    if len(parts) != len(FIELDS) + 1 or "" in parts:
        raise FormatError(f"Unexpected format of ID ({resource_id!r}), expected {ID_FORMAT}")
    cluster_id, *acl_values = parts
    return cluster_id, KafkaAcl(**dict(zip(FIELDS, acl_values, strict=True)))


def get_resource_name(cluster_id: str, acl: KafkaAcl) -> str:
    """Pulumi resource name: readable prefix plus a digest of the full id, so names are unique per ACL."""
    principal_name = acl.principal.split(":", 1)[-1]
    prefix = "-".join([principal_name, acl.resource_type, acl.resource_name, acl.operation]).lower().replace("*", "all")
    digest = hashlib.sha256(encode_id(cluster_id, acl).encode()).hexdigest()[:10]
    return f"{prefix}-{digest}"
