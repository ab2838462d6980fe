"""Errors raised by the bundled stores and API client."""


class NodeNotFoundError(KeyError):
    """A node id referenced by a move is not in the store."""


class CyclicMoveError(ValueError):
    """A move would make a node its own ancestor."""


class ApiError(RuntimeError):
    """A remote command failed or returned an error envelope."""
