class KafkaAclError(Exception):
    pass


class PreconditionError(KafkaAclError):
    """Cluster is not in a state that allows ACL changes."""


class TransportError(KafkaAclError):
    """Instaclustr API call failed. The original error is kept as __cause__."""


class ConflictError(KafkaAclError):
    """Matching ACL already exists on the cluster."""


class FormatError(KafkaAclError):
    """Resource id can not be decoded."""
