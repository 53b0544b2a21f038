"""Event dispatch and command registration for nodepath modules.

This module provides three components:

* :class:`Event` -- A dataclass describing one fired event: which component
  raised it, its name, the document it concerns, and an optional payload.
* :class:`EventDispatcher` -- An explicit many-to-many subscription table
  from ``(source, event_name)`` to handler callables.
* :class:`CommandRegistry` -- Named zero-argument commands that, when
  invoked for a document, raise a named event through the dispatcher.
  Commands can be restricted to documents of given content types.

Subscriptions are made by direct calls at module setup time::

    dispatcher.subscribe("show-tree", "describe", self._on_describe)
    commands.register("show-tree", "show-tree", "describe", ["python"])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from nodepath.exceptions import (
    CommandNotFoundError,
    CommandUnavailableError,
    DispatchError,
)
from nodepath.models import Document

logger = logging.getLogger(__name__)

EventHandler = Callable[["Event"], Any]


@dataclass
class Event:
    """A single fired event delivered to subscribed handlers.

    Attributes:
        source: Name of the component that raised the event.
        name: Event name, unique within *source*.
        document: The document the event concerns, if any.
        payload: Extra event data (e.g. the invoking command's name).
    """

    source: str
    name: str
    document: Optional[Document] = None
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str]:
        """The ``(source, name)`` pair identifying which event fired."""
        return (self.source, self.name)


class EventDispatcher:
    """Delivers events to handlers subscribed to ``(source, event_name)``.

    Handlers run synchronously in subscription order. Exceptions raised by a
    handler propagate to the caller of :meth:`broadcast`; the remaining
    handlers for that event are not run.
    """

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], list[EventHandler]] = {}

    def subscribe(self, source: str, event_name: str, handler: EventHandler) -> None:
        """Register *handler* for events named *event_name* raised by *source*.

        Subscribing the same handler twice to the same event is a no-op.
        """
        handlers = self._handlers.setdefault((source, event_name), [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %r to %s.%s", handler, source, event_name)

    def unsubscribe(self, source: str, event_name: str, handler: EventHandler) -> None:
        """Remove a previous subscription.

        Raises:
            DispatchError: If *handler* is not subscribed to that event.
        """
        handlers = self._handlers.get((source, event_name), [])
        if handler not in handlers:
            raise DispatchError(
                f"Handler is not subscribed to '{source}.{event_name}'"
            )
        handlers.remove(handler)
        if not handlers:
            del self._handlers[(source, event_name)]

    def broadcast(self, event: Event) -> list[Any]:
        """Deliver *event* to its subscribers.

        Args:
            event: The event to deliver.

        Returns:
            Each handler's return value, in subscription order. Empty when
            nobody is subscribed.
        """
        handlers = list(self._handlers.get(event.key, []))
        if not handlers:
            logger.debug("No subscribers for %s.%s", event.source, event.name)
            return []
        return [handler(event) for handler in handlers]

    def subscribers(self, source: str, event_name: str) -> list[EventHandler]:
        """Return the handlers subscribed to ``source.event_name``, in order."""
        return list(self._handlers.get((source, event_name), []))

    def subscriptions(self) -> list[tuple[str, str]]:
        """Return every ``(source, event_name)`` with at least one handler."""
        return sorted(self._handlers)


@dataclass(frozen=True)
class Command:
    """A registered zero-argument command."""

    name: str
    source: str
    event_name: str
    content_types: tuple[str, ...] = ()

    def allows(self, content_type: Optional[str]) -> bool:
        """Whether the command may run on documents of *content_type*."""
        return not self.content_types or content_type in self.content_types


class CommandRegistry:
    """Named commands that raise events for the current document.

    Args:
        dispatcher: Dispatcher used to deliver the events commands raise.
    """

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self._dispatcher = dispatcher
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        source: str,
        event_name: str,
        content_types: Iterable[str] = (),
    ) -> Command:
        """Register command *name* raising ``source.event_name``.

        Args:
            name: Unique command name (e.g. ``"show-tree"``).
            source: Component the raised event is attributed to.
            event_name: Name of the raised event.
            content_types: Content types the command is restricted to.
                Empty means every content type.

        Raises:
            DispatchError: If *name* is already registered.
        """
        if name in self._commands:
            raise DispatchError(f"Command '{name}' is already registered")
        command = Command(name, source, event_name, tuple(content_types))
        self._commands[name] = command
        return command

    def unregister(self, name: str) -> None:
        """Remove command *name*.

        Raises:
            CommandNotFoundError: If no command called *name* exists.
        """
        self.get(name)
        del self._commands[name]

    def get(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError:
            raise CommandNotFoundError(f"Unknown command '{name}'") from None

    def invoke(self, name: str, document: Document) -> list[Any]:
        """Run command *name* against *document*.

        Returns:
            The results of the handlers subscribed to the raised event.

        Raises:
            CommandNotFoundError: If no command called *name* exists.
            CommandUnavailableError: If the command is restricted to other
                content types.
        """
        command = self.get(name)
        if not command.allows(document.content_type):
            allowed = ", ".join(command.content_types)
            raise CommandUnavailableError(
                f"Command '{name}' is not available for "
                f"'{document.content_type or 'unknown'}' documents (allowed: {allowed})"
            )
        event = Event(
            source=command.source,
            name=command.event_name,
            document=document,
            payload={"command": name},
        )
        return self._dispatcher.broadcast(event)

    def available_for(self, content_type: Optional[str]) -> list[str]:
        """Return the names of commands usable on *content_type* documents."""
        return sorted(
            name for name, command in self._commands.items() if command.allows(content_type)
        )

    def list_commands(self) -> list[dict[str, str]]:
        """List registered commands as ``name``/``event``/``content_types`` dicts."""
        return [
            {
                "name": command.name,
                "event": f"{command.source}.{command.event_name}",
                "content_types": ", ".join(command.content_types) or "*",
            }
            for command in self._commands.values()
        ]
