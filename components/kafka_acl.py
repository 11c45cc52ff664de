import pulumi

from config import config
from instaclustr_kafka.acl import KafkaAcl as KafkaAclRecord
from instaclustr_kafka.identifier import get_resource_name
from instaclustr_kafka.provider import KafkaAcl, KafkaAclProvider

if not (config.instaclustr_username and config.instaclustr_api_key):
    pulumi.log.warn(f"{config.env_prefix}INSTACLUSTR_USERNAME or {config.env_prefix}INSTACLUSTR_API_KEY is not set, Kafka ACL operations will fail")

kafka_acl_provider = KafkaAclProvider(api_url=config.instaclustr_api_url, env_prefix=config.env_prefix)

kafka_acls = []
for acl_config in config.kafka_acls:
    acl = KafkaAclRecord.from_mapping(acl_config)
    kafka_acls.append(
        KafkaAcl(
            resource_name=get_resource_name(config.cluster_id or "", acl),
            cluster_id=config.cluster_id,
            principal=acl.principal,
            host=acl.host,
            resource_type=acl.resource_type,
            resource_name_=acl.resource_name,
            operation=acl.operation,
            permission_type=acl.permission_type,
            pattern_type=acl.pattern_type,
            provider=kafka_acl_provider,
            opts=pulumi.ResourceOptions(protect=config.protect_acls),
        )
    )

pulumi.export("kafka_acl_ids", [acl.id for acl in kafka_acls])
