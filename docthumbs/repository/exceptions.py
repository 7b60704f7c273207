# docthumbs/repository/exceptions.py
"""
Repository Operation Exceptions - Clean Error Handling Pattern

Content repository implementations raise these exceptions (no logging);
services catch them, log with context and decide whether to propagate.

Usage Examples:
    # In a repository implementation:
    try:
        node = self._nodes[(workspace, identifier)]
    except KeyError as e:
        raise NodeNotFoundError(
            f"No node {identifier} in workspace {workspace}",
            operation="get_node_by_identifier",
        ) from e

    # In the service layer:
    try:
        artifact = self.store.store(node, image, thumbnail_name)
    except RepositoryOperationError as e:
        logger.error(f"Failed to store thumbnail for {node.path}: {e}")
        raise
"""

from typing import Any, Dict, Optional


class RepositoryOperationError(Exception):
    """
    Base exception for all content repository failures.

    Indicates a problem reading or writing repository state, which callers
    may need to react to (e.g. a broken transaction), as opposed to a merely
    missing thumbnail.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.details = details or {}

    def __str__(self):
        if self.operation:
            return f"{self.operation}: {super().__str__()}"
        return super().__str__()


class NodeNotFoundError(RepositoryOperationError):
    """The requested node or child node does not exist."""

    pass


class CheckoutError(RepositoryOperationError):
    """The node could not be made writable."""

    pass
