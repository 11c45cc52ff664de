import os
from dataclasses import dataclass, field

import pulumi


@dataclass(kw_only=True)
class Config:
    pulumi_config: pulumi.Config = field(default_factory=pulumi.Config)
    env_prefix: str = ""
    instaclustr_api_url: str = "https://api.instaclustr.com"
    cluster_id: str = None
    protect_acls: bool = False
    kafka_acls: list[dict[str, str]] = field(
        default_factory=lambda: [
            {
                "principal": "User:orders-consumer",
                "host": "*",
                "resource_type": "TOPIC",
                "resource_name": "orders",
                "operation": "READ",
                "permission_type": "ALLOW",
                "pattern_type": "LITERAL",
            },
            {
                "principal": "User:orders-consumer",
                "host": "*",
                "resource_type": "GROUP",
                "resource_name": "orders-",
                "operation": "READ",
                "permission_type": "ALLOW",
                "pattern_type": "PREFIXED",
            },
            {
                "principal": "User:orders-producer",
                "host": "*",
                "resource_type": "TOPIC",
                "resource_name": "orders",
                "operation": "WRITE",
                "permission_type": "ALLOW",
                "pattern_type": "LITERAL",
            },
        ]
    )

    def __post_init__(self) -> None:
        self.cluster_id = self.pulumi_config.get("cluster_id") or os.getenv(f"{self.env_prefix}KAFKA_CLUSTER_ID") or self.cluster_id
        self.instaclustr_api_url = os.getenv(f"{self.env_prefix}INSTACLUSTR_API_URL", self.instaclustr_api_url)

    # Credentials are read again by the provider process, see utils.instaclustr.InstaclustrClient.from_env
    @property
    def instaclustr_username(self) -> str:
        return os.getenv(f"{self.env_prefix}INSTACLUSTR_USERNAME")

    @property
    def instaclustr_api_key(self) -> str:
        return os.getenv(f"{self.env_prefix}INSTACLUSTR_API_KEY")


@dataclass(kw_only=True)
class LocalConfig(Config):
    env_prefix: str = "LOCAL_"


@dataclass(kw_only=True)
class ProductionConfig(Config):
    env_prefix: str = "PRODUCTION_"
    protect_acls: bool = True


pulumi_stack = pulumi.get_stack()
config = ProductionConfig() if pulumi_stack == "production" else LocalConfig()
