# docthumbs/repository/memory.py
"""
In-memory content repository.

Reference implementation of the repository contracts: hierarchical nodes,
binary content, per-node properties and optional checkout semantics for
versionable nodes. Every mutation happens under one repository lock, so a
single property write is atomic.
"""

import io
import threading
import uuid
from contextlib import contextmanager
from typing import Any, BinaryIO, Dict, Iterable, Iterator, List, Optional, Tuple

from ..constants import DEFAULT_WORKSPACE, PROPERTY_DATA, PROPERTY_MIME_TYPE
from ..enums import NodeType
from .base import ContentNode, ContentRepository
from .exceptions import CheckoutError, NodeNotFoundError, RepositoryOperationError


class MemoryContentNode(ContentNode):
    """Node of an InMemoryContentRepository."""

    def __init__(
        self,
        repository: "InMemoryContentRepository",
        name: str,
        path: str,
        workspace: str,
        node_type: NodeType,
        mixins: Optional[Iterable[str]] = None,
        versionable: bool = False,
    ):
        self._repository = repository
        self._identifier = uuid.uuid4().hex
        self._name = name
        self._path = path
        self._workspace = workspace
        self._node_type = node_type
        self._properties: Dict[str, Any] = {}
        self._children: Dict[str, "MemoryContentNode"] = {}
        self.mixins = set(mixins or [])
        self.versionable = versionable
        self.checked_out = not versionable
        self.checkout_count = 0

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        return self._path

    @property
    def workspace(self) -> str:
        return self._workspace

    @property
    def node_type(self) -> NodeType:
        return self._node_type

    @property
    def mime_type(self) -> Optional[str]:
        return self.get_property(PROPERTY_MIME_TYPE)

    @property
    def children(self) -> List["MemoryContentNode"]:
        with self._repository.lock:
            return list(self._children.values())

    def has_content(self) -> bool:
        return self.get_property(PROPERTY_DATA) is not None

    @contextmanager
    def open_content(self) -> Iterator[BinaryIO]:
        data = self.get_property(PROPERTY_DATA)
        if data is None:
            raise RepositoryOperationError(
                f"Node {self._path} has no binary content", operation="open_content"
            )
        stream = io.BytesIO(data)
        try:
            yield stream
        finally:
            stream.close()

    def get_child(self, name: str) -> Optional["MemoryContentNode"]:
        with self._repository.lock:
            return self._children.get(name)

    def add_child(
        self,
        name: str,
        node_type: NodeType,
        mixins: Optional[Iterable[str]] = None,
    ) -> "MemoryContentNode":
        with self._repository.lock:
            self._ensure_writable("add_child")
            if name in self._children:
                raise RepositoryOperationError(
                    f"Node {self._path} already has a child named {name}",
                    operation="add_child",
                )
            child = MemoryContentNode(
                self._repository,
                name=name,
                path=f"{self._path.rstrip('/')}/{name}",
                workspace=self._workspace,
                node_type=node_type,
                mixins=mixins,
            )
            self._children[name] = child
            self._repository._register(child)
            return child

    def remove_child(self, name: str) -> None:
        with self._repository.lock:
            self._ensure_writable("remove_child")
            child = self._children.pop(name, None)
            if child is not None:
                self._repository._unregister(child)

    def checkout(self) -> None:
        with self._repository.lock:
            self.checkout_count += 1
            self.checked_out = True

    def has_property(self, name: str) -> bool:
        with self._repository.lock:
            return name in self._properties

    def get_property(self, name: str, default: Any = None) -> Any:
        with self._repository.lock:
            return self._properties.get(name, default)

    def set_property(self, name: str, value: Any) -> None:
        with self._repository.lock:
            self._ensure_writable("set_property")
            self._properties[name] = value

    def remove_property(self, name: str) -> None:
        with self._repository.lock:
            self._ensure_writable("remove_property")
            self._properties.pop(name, None)

    def _ensure_writable(self, operation: str) -> None:
        if not self.checked_out:
            raise CheckoutError(
                f"Node {self._path} is checked in and cannot be modified",
                operation=operation,
            )

    def __repr__(self) -> str:
        return f"<MemoryContentNode {self._workspace}:{self._path}>"


class InMemoryContentRepository(ContentRepository):
    """
    Thread-safe, process-local content repository.

    Usage:
        repository = InMemoryContentRepository()
        node = repository.create_file("/files/report.pdf", pdf_bytes, "application/pdf")
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._nodes: Dict[Tuple[str, str], MemoryContentNode] = {}
        self._paths: Dict[Tuple[str, str], MemoryContentNode] = {}

    def _register(self, node: MemoryContentNode) -> None:
        self._nodes[(node.workspace, node.identifier)] = node
        self._paths[(node.workspace, node.path)] = node

    def _unregister(self, node: MemoryContentNode) -> None:
        for child in list(node._children.values()):
            self._unregister(child)
        self._nodes.pop((node.workspace, node.identifier), None)
        self._paths.pop((node.workspace, node.path), None)

    def get_node_by_identifier(
        self, identifier: str, workspace: str = DEFAULT_WORKSPACE
    ) -> MemoryContentNode:
        with self.lock:
            try:
                return self._nodes[(workspace, identifier)]
            except KeyError as e:
                raise NodeNotFoundError(
                    f"No node {identifier} in workspace {workspace}",
                    operation="get_node_by_identifier",
                ) from e

    def get_node_by_path(
        self, path: str, workspace: str = DEFAULT_WORKSPACE
    ) -> MemoryContentNode:
        with self.lock:
            try:
                return self._paths[(workspace, path)]
            except KeyError as e:
                raise NodeNotFoundError(
                    f"No node at {path} in workspace {workspace}",
                    operation="get_node_by_path",
                ) from e

    def create_node(
        self,
        path: str,
        node_type: NodeType,
        workspace: str = DEFAULT_WORKSPACE,
        versionable: bool = False,
    ) -> MemoryContentNode:
        """Create a top-level node at an absolute path."""
        name = path.rstrip("/").rsplit("/", 1)[-1]
        with self.lock:
            if (workspace, path) in self._paths:
                raise RepositoryOperationError(
                    f"Node already exists at {path}", operation="create_node"
                )
            node = MemoryContentNode(
                self,
                name=name,
                path=path,
                workspace=workspace,
                node_type=node_type,
                versionable=versionable,
            )
            self._register(node)
            return node

    def create_file(
        self,
        path: str,
        content: Optional[bytes],
        mime_type: Optional[str],
        workspace: str = DEFAULT_WORKSPACE,
        node_type: NodeType = NodeType.FILE,
        versionable: bool = False,
    ) -> MemoryContentNode:
        """Create a file-like node carrying binary content and a mime type."""
        node = self.create_node(path, node_type, workspace=workspace)
        if content is not None:
            node.set_property(PROPERTY_DATA, content)
        if mime_type is not None:
            node.set_property(PROPERTY_MIME_TYPE, mime_type)
        if versionable:
            node.versionable = True
            node.checked_out = False
        return node
