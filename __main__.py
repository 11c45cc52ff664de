"""Instaclustr Kafka ACLs IaaC entrypoint."""

from components import kafka_acl  # noqa: F401 Resources are declared on import
