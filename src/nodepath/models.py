"""Canonical Pydantic models shared across nodepath modules.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`ModulesConfig`, :class:`ShowTreeConfig`,
    and :class:`GlobalConfig`.

**Document models** -- the input handed to syntax tree providers:
    :class:`Cursor` and :class:`Document`.

``GlobalConfig`` uses ``extra="allow"`` so that settings for third-party
modules survive a load/save round trip and are reachable via
``model_extra``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class ModulesConfig(BaseModel):
    """Explicit module allow/deny lists stored in :class:`GlobalConfig`."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


class ShowTreeConfig(BaseModel):
    """Settings for the built-in ``show-tree`` module.

    Example::

        ShowTreeConfig(separator="/", content_types=["python", "markdown"])
    """

    separator: Optional[str] = Field(
        default="→",
        description="String placed between labels. Empty or null means a single space.",
    )
    content_types: list[str] = Field(
        default_factory=list,
        description="Content types the command is available for. Empty means all.",
    )
    named_only: bool = Field(
        default=True,
        description="Report the smallest named node instead of anonymous tokens.",
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/nodepath/config.json``.

    Loaded and saved by :func:`~nodepath.config.load_global_config` and
    :func:`~nodepath.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~nodepath.config.resolve_config`.
    """

    model_config = ConfigDict(extra="allow")

    output: OutputConfig = Field(default_factory=OutputConfig)
    modules: ModulesConfig = Field(default_factory=ModulesConfig)
    show_tree: ShowTreeConfig = Field(default_factory=ShowTreeConfig)


# --- Documents ---


class Cursor(BaseModel):
    """A 0-based cursor position inside a document."""

    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)


class Document(BaseModel):
    """An open document as seen by syntax tree providers.

    ``content_type`` names the grammar (``"python"``, ``"markdown"``, ...)
    and is what commands are restricted by.
    """

    path: Optional[str] = None
    content_type: Optional[str] = None
    text: str = ""
    cursor: Cursor = Field(default_factory=Cursor)
