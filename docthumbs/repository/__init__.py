"""
Content repository contracts and the in-memory reference implementation.
"""

from .base import ContentNode, ContentRepository
from .exceptions import CheckoutError, NodeNotFoundError, RepositoryOperationError
from .memory import InMemoryContentRepository, MemoryContentNode

__all__ = [
    "ContentNode",
    "ContentRepository",
    "InMemoryContentRepository",
    "MemoryContentNode",
    "RepositoryOperationError",
    "NodeNotFoundError",
    "CheckoutError",
]
