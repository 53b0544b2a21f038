"""Node adapters implementing :class:`~nodepath.labeler.LabeledNode`.

* :class:`SimpleNode` -- an in-memory node for hand-built trees, tests, and
  trees described as nested dicts (``{"label": ..., "children": [...]}``).
* :class:`TreeSitterNode` -- a thin wrapper exposing a ``tree_sitter.Node``
  through the ``parent()``/``label()`` capability pair. The label is the
  node's grammar type (``"function_definition"``, ``"paragraph"``, ...).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from nodepath.exceptions import TreeError

if TYPE_CHECKING:
    from tree_sitter import Node


@dataclass(eq=False)
class SimpleNode:
    """A labelled tree node held entirely in memory.

    Nodes compare by identity so that two siblings with the same label stay
    distinct.

    Example::

        root = SimpleNode("document")
        para = root.add_child("section").add_child("paragraph")
        describe(para, "/")  # 'document / section / paragraph'
    """

    name: str
    parent_node: Optional[SimpleNode] = field(default=None, repr=False)
    children: list[SimpleNode] = field(default_factory=list, repr=False)

    def parent(self) -> Optional[SimpleNode]:
        return self.parent_node

    def label(self) -> str:
        return self.name

    def add_child(self, name: str) -> SimpleNode:
        """Create a child labelled *name*, link it under this node, and return it."""
        child = SimpleNode(name, parent_node=self)
        self.children.append(child)
        return child

    def find(self, labels: Iterable[str]) -> Optional[SimpleNode]:
        """Descend from this node following child *labels* in order.

        The first child with a matching label is taken at each level.

        Returns:
            The node reached, or ``None`` if some label has no match.
        """
        current = self
        for wanted in labels:
            for child in current.children:
                if child.name == wanted:
                    current = child
                    break
            else:
                return None
        return current

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SimpleNode:
        """Build a tree from nested ``{"label": str, "children": [...]}`` mappings.

        Args:
            data: The root mapping. ``children`` is optional.

        Returns:
            The root node.

        Raises:
            TreeError: If a mapping has no string ``label`` or ``children``
                is not a list.
        """
        return cls._from_mapping(data, None)

    @classmethod
    def _from_mapping(
        cls, data: Mapping[str, Any], parent: Optional[SimpleNode]
    ) -> SimpleNode:
        if not isinstance(data, Mapping):
            raise TreeError(f"Tree node must be an object, got {type(data).__name__}")
        label = data.get("label")
        if not isinstance(label, str):
            raise TreeError(f"Tree node is missing a string 'label': {dict(data)!r}")
        children = data.get("children", [])
        if not isinstance(children, list):
            raise TreeError(f"'children' of node '{label}' must be a list")

        node = cls(label, parent_node=parent)
        for child in children:
            node.children.append(cls._from_mapping(child, node))
        return node


class TreeSitterNode:
    """Adapter from ``tree_sitter.Node`` to the labelled-node interface.

    Wrapping is cheap and happens lazily: :meth:`parent` creates a new
    wrapper around ``node.parent`` on each call.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def node(self) -> Node:
        """The wrapped tree-sitter node."""
        return self._node

    def parent(self) -> Optional[TreeSitterNode]:
        parent = self._node.parent
        if parent is None:
            return None
        return TreeSitterNode(parent)

    def label(self) -> str:
        return self._node.type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeSitterNode):
            return NotImplemented
        return self._node == other._node

    def __hash__(self) -> int:
        return hash(self._node)

    def __repr__(self) -> str:
        row, column = self._node.start_point
        return f"TreeSitterNode({self._node.type!r} at {row}:{column})"
