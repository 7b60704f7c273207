# docthumbs/repository/base.py
"""
Content repository contracts used by the thumbnail pipeline.

The pipeline never depends on a concrete store. It reads a node's binary
content and metadata, and writes one named child node holding the generated
image. Anything providing these operations can host thumbnails.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, BinaryIO, Iterable, Optional

from ..enums import NodeType


class ContentNode(ABC):
    """A node of a hierarchical content repository."""

    @property
    @abstractmethod
    def identifier(self) -> str: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def path(self) -> str: ...

    @property
    @abstractmethod
    def workspace(self) -> str: ...

    @property
    @abstractmethod
    def node_type(self) -> NodeType: ...

    @property
    @abstractmethod
    def mime_type(self) -> Optional[str]:
        """Mime type of the node's binary content, if it has any."""

    @abstractmethod
    def has_content(self) -> bool:
        """True when the node carries a readable binary payload."""

    @abstractmethod
    def open_content(self) -> AbstractContextManager[BinaryIO]:
        """Open the binary content for reading; the stream closes on exit."""

    def is_node_type(self, node_type: NodeType) -> bool:
        return self.node_type == node_type

    def is_file(self) -> bool:
        return self.is_node_type(NodeType.FILE)

    # Children

    @abstractmethod
    def get_child(self, name: str) -> Optional["ContentNode"]:
        """Return the child with the given name, or None."""

    @abstractmethod
    def add_child(
        self,
        name: str,
        node_type: NodeType,
        mixins: Optional[Iterable[str]] = None,
    ) -> "ContentNode":
        """Create a child node. Raises RepositoryOperationError if it exists."""

    @abstractmethod
    def remove_child(self, name: str) -> None:
        """Delete the named child and its subtree. Missing children are ignored."""

    # Properties

    @abstractmethod
    def checkout(self) -> None:
        """Make the node writable (no-op for stores without versioning)."""

    @abstractmethod
    def has_property(self, name: str) -> bool: ...

    @abstractmethod
    def get_property(self, name: str, default: Any = None) -> Any: ...

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None: ...

    @abstractmethod
    def remove_property(self, name: str) -> None: ...


class ContentRepository(ABC):
    """Lookup of nodes by stable identifier within a workspace."""

    @abstractmethod
    def get_node_by_identifier(self, identifier: str, workspace: str) -> ContentNode:
        """
        Resolve a node.

        Raises:
            NodeNotFoundError: if no such node exists in the workspace
        """
