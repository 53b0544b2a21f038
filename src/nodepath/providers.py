"""Documents and syntax tree providers.

A provider answers a single question: which node sits under the cursor of a
:class:`~nodepath.models.Document`? The answer is any
:class:`~nodepath.labeler.LabeledNode`, or ``None`` when the cursor is not
inside the parsed content.

* :class:`TreeSitterProvider` parses with tree-sitter grammars from
  ``tree-sitter-language-pack``.
* :class:`StaticProvider` always returns the same node, for embedding and
  tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from nodepath.exceptions import DocumentError, UnsupportedLanguageError
from nodepath.labeler import LabeledNode
from nodepath.models import Cursor, Document
from nodepath.nodes import TreeSitterNode

logger = logging.getLogger(__name__)

_SUFFIX_CONTENT_TYPES: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".md": "markdown",
    ".markdown": "markdown",
    ".json": "json",
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".js": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".rs": "rust",
    ".go": "go",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".java": "java",
    ".rb": "ruby",
    ".lua": "lua",
    ".sh": "bash",
    ".html": "html",
    ".css": "css",
    ".norg": "norg",
}


def detect_content_type(path: str | Path) -> Optional[str]:
    """Guess a document's content type from its file suffix.

    Returns:
        The grammar name, or ``None`` for unknown suffixes.
    """
    return _SUFFIX_CONTENT_TYPES.get(Path(path).suffix.lower())


def load_document(
    path: str | Path,
    line: int = 0,
    column: int = 0,
    content_type: Optional[str] = None,
) -> Document:
    """Read *path* into a :class:`~nodepath.models.Document`.

    Args:
        path: File to read (UTF-8).
        line: 0-based cursor line.
        column: 0-based cursor column.
        content_type: Explicit grammar name; detected from the suffix when
            omitted.

    Raises:
        DocumentError: If the file is missing or not valid UTF-8.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentError(f"Document not found: {file_path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Cannot read document {file_path}: {exc}") from exc

    return Document(
        path=str(file_path),
        content_type=content_type or detect_content_type(file_path),
        text=text,
        cursor=Cursor(line=line, column=column),
    )


class TreeProvider(Protocol):
    """Supplies the node under a document's cursor."""

    def node_at_cursor(self, document: Document) -> Optional[LabeledNode]:
        ...


class StaticProvider:
    """Provider that ignores the document and returns a fixed node."""

    def __init__(self, node: Optional[LabeledNode]) -> None:
        self._node = node

    def node_at_cursor(self, document: Document) -> Optional[LabeledNode]:
        return self._node


class TreeSitterProvider:
    """Provider backed by tree-sitter grammars.

    Parsers are created on first use per content type and cached. Each call
    re-parses the document text, so the answer always reflects the current
    contents.

    Args:
        named_only: Return the smallest *named* node spanning the cursor
            rather than anonymous tokens such as ``"("`` or ``"def"``.
    """

    def __init__(self, named_only: bool = True) -> None:
        self._named_only = named_only
        self._parsers: dict[str, Any] = {}

    def _get_parser(self, content_type: Optional[str]) -> Any:
        if not content_type:
            raise UnsupportedLanguageError(
                "Document has no content type; pass --language explicitly"
            )
        parser = self._parsers.get(content_type)
        if parser is None:
            from tree_sitter_language_pack import get_parser

            try:
                parser = get_parser(content_type)
            except Exception as exc:
                raise UnsupportedLanguageError(
                    f"No tree-sitter grammar for '{content_type}': {exc}"
                ) from exc
            logger.debug("Created tree-sitter parser for '%s'", content_type)
            self._parsers[content_type] = parser
        return parser

    def node_at_cursor(self, document: Document) -> Optional[TreeSitterNode]:
        """Parse *document* and return the node spanning its cursor.

        Returns:
            The wrapped node, or ``None`` if the cursor line lies past the
            end of the document. The empty line after a trailing newline
            is inside the document and resolves to the root.

        Raises:
            UnsupportedLanguageError: If the content type has no grammar.
        """
        parser = self._get_parser(document.content_type)
        source = document.text.encode("utf-8")
        # tree-sitter counts rows by "\n" only, unlike str.splitlines().
        lines = document.text.split("\n")
        cursor = document.cursor
        if cursor.line >= len(lines):
            logger.debug("Cursor line %d is outside the document", cursor.line)
            return None

        # tree-sitter points are (row, byte column).
        line_text = lines[cursor.line].rstrip("\r")
        byte_column = len(line_text[: cursor.column].encode("utf-8"))
        point = (cursor.line, byte_column)

        tree = parser.parse(source)
        root = tree.root_node
        if self._named_only:
            node = root.named_descendant_for_point_range(point, point)
        else:
            node = root.descendant_for_point_range(point, point)
        if node is None:
            return None
        return TreeSitterNode(node)
