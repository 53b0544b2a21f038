"""Root-to-node path labelling.

Turns a node somewhere inside a hierarchical tree into a readable string of
ancestor labels, root first::

    >>> describe(paragraph, "→")
    'document → section → paragraph'

Nodes are consumed through the :class:`LabeledNode` protocol -- anything
with ``parent()`` and ``label()`` works, whether it wraps a tree-sitter node
or is built by hand (see :mod:`nodepath.nodes`). The tree is only read,
never mutated, and nothing is retained between calls.

The walk assumes an acyclic tree. A node that is its own ancestor makes
:func:`build_path` loop forever; guaranteeing acyclicity is the tree
provider's job.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LabeledNode(Protocol):
    """Capability interface for a node in a labelled tree."""

    def parent(self) -> Optional[LabeledNode]:
        """Return the parent node, or ``None`` at the root."""
        ...

    def label(self) -> str:
        """Return the node's label (for syntax trees, its node type)."""
        ...


def build_path(node: LabeledNode) -> list[LabeledNode]:
    """Return the chain of nodes from the root down to *node*, inclusive.

    Args:
        node: The starting node.

    Returns:
        A non-empty list, root first, whose last element is *node* itself.
    """
    path: list[LabeledNode] = []
    current: Optional[LabeledNode] = node
    while current is not None:
        path.append(current)
        current = current.parent()
    path.reverse()
    return path


def extract_labels(path: Iterable[LabeledNode]) -> list[str]:
    """Map each node of *path* to its label, preserving order."""
    return [node.label() for node in path]


def resolve_separator(configured: Optional[str]) -> str:
    """Normalise a configured separator into the string placed between labels.

    An absent or empty separator becomes a single space. Anything else is
    padded with one space on each side.

    Args:
        configured: The separator from configuration, possibly ``None``.

    Returns:
        The separator string to join labels with.
    """
    if not configured:
        return " "
    return f" {configured} "


def join_labels(labels: Sequence[str], separator: str) -> str:
    """Join *labels* with *separator* strictly between consecutive elements."""
    return separator.join(labels)


def describe(node: LabeledNode, configured_separator: Optional[str] = None) -> str:
    """Describe *node* as the separator-joined labels of its root-to-node path.

    Args:
        node: The node to describe.
        configured_separator: Raw separator setting; ``None`` and ``""``
            both mean "single space".

    Returns:
        The display string, e.g. ``"document → section → paragraph"``.
    """
    labels = extract_labels(build_path(node))
    return join_labels(labels, resolve_separator(configured_separator))
