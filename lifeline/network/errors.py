"""Network graph exceptions."""


class NetworkError(Exception):
    """Base exception for rejected graph mutations."""

    pass


class InvalidReference(NetworkError):
    """Raised when an edge references a node that does not exist."""

    def __init__(self, message: str, node_id: str | None = None):
        self.node_id = node_id
        super().__init__(message)


class SelfLoop(NetworkError):
    """Raised when an edge would connect a node to itself."""

    def __init__(self, message: str, node_id: str | None = None):
        self.node_id = node_id
        super().__init__(message)


class InvalidNodeType(NetworkError, ValueError):
    """Raised when a node type is outside the closed set of facility types."""

    def __init__(self, node_type: object):
        self.node_type = node_type
        super().__init__(f"Unknown node type: {node_type!r}")
