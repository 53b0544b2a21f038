"""The ``show-tree`` module -- print the syntax path under the cursor.

On setup the module registers a ``show-tree`` command that raises the
``show-tree.describe`` event, and subscribes its own handler to that event.
When the command runs, the handler asks the tree provider for the node
under the document's cursor, turns it into a root-to-node label string with
:func:`~nodepath.labeler.describe`, and hands the string to the output sink.

When the provider finds no node under the cursor the handler reports a
warning and returns ``None``; it never raises for that case.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from nodepath.labeler import LabeledNode, describe
from nodepath.models import Document, GlobalConfig, ShowTreeConfig
from nodepath.modules.base import Module
from nodepath.modules.events import CommandRegistry, Event, EventDispatcher
from nodepath.providers import TreeProvider, TreeSitterProvider

logger = logging.getLogger(__name__)

MODULE_NAME = "show-tree"
COMMAND_NAME = "show-tree"
DESCRIBE_EVENT = "describe"
NO_NODE_MESSAGE = "No syntax node under cursor"


class ShowTreeApi:
    """Public API of the ``show-tree`` module."""

    def __init__(self, module: ShowTreeModule) -> None:
        self._module = module

    @property
    def separator(self) -> Optional[str]:
        return self._module.settings.separator

    def describe(self, node: LabeledNode) -> str:
        """Describe *node* using the configured separator."""
        return describe(node, self.separator)

    def describe_document(self, document: Document) -> Optional[str]:
        """Describe the node under *document*'s cursor without printing it."""
        node = self._module.provider.node_at_cursor(document)
        if node is None:
            return None
        return describe(node, self.separator)


class ShowTreeModule(Module):
    """Built-in module implementing the ``show-tree`` command.

    Args:
        provider: Syntax tree provider. Defaults to a
            :class:`~nodepath.providers.TreeSitterProvider` created in
            :meth:`on_init`.
        sink: Callable receiving the result string. Defaults to
            :func:`nodepath.output.print_data`.
        notify: Callable receiving the "no node" warning. Defaults to
            :func:`nodepath.output.warning`.
    """

    def __init__(
        self,
        provider: Optional[TreeProvider] = None,
        sink: Optional[Callable[[str], None]] = None,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._provider = provider
        self._sink = sink
        self._notify = notify
        self._settings = ShowTreeConfig()
        self._api = ShowTreeApi(self)

    @property
    def name(self) -> str:
        return MODULE_NAME

    @property
    def description(self) -> str:
        return "Show the syntax tree path under the cursor"

    @property
    def public(self) -> ShowTreeApi:
        return self._api

    @property
    def settings(self) -> ShowTreeConfig:
        return self._settings

    @property
    def provider(self) -> TreeProvider:
        if self._provider is None:
            self._provider = TreeSitterProvider(named_only=self._settings.named_only)
        return self._provider

    def on_init(self, config: GlobalConfig) -> None:
        self._settings = config.show_tree

    def setup(self, dispatcher: EventDispatcher, commands: CommandRegistry) -> None:
        commands.register(
            COMMAND_NAME,
            MODULE_NAME,
            DESCRIBE_EVENT,
            content_types=self._settings.content_types,
        )
        dispatcher.subscribe(MODULE_NAME, DESCRIBE_EVENT, self.on_event)

    def on_event(self, event: Event) -> Optional[str]:
        """Handle ``show-tree.describe``; other events are ignored."""
        if event.key != (MODULE_NAME, DESCRIBE_EVENT) or event.document is None:
            return None

        node = self.provider.node_at_cursor(event.document)
        if node is None:
            self._emit_notice(NO_NODE_MESSAGE)
            return None

        result = describe(node, self._settings.separator)
        logger.debug("Described cursor node as %r", result)
        self._emit(result)
        return result

    def _emit(self, text: str) -> None:
        if self._sink is not None:
            self._sink(text)
            return
        from nodepath.output import print_data

        print_data(text)

    def _emit_notice(self, text: str) -> None:
        if self._notify is not None:
            self._notify(text)
            return
        from nodepath.output import warning

        warning(text)

    def cleanup(self) -> None:
        self._provider = None
