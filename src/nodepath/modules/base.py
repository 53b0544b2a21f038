"""Abstract base class for nodepath modules.

Every module must subclass :class:`Module` and implement the :attr:`name`
property. The lifecycle hooks (``on_init``, ``setup``, ``cleanup``) are
optional -- default implementations are no-ops.

A module has two surfaces:

* :attr:`Module.public` -- the capability object other components may call
  (looked up with :meth:`~nodepath.modules.manager.ModuleManager.get_public`).
* Everything else, kept in underscore attributes, is private state.

Modules are registered as entry points in the ``nodepath.modules`` group
and discovered at runtime by :class:`~nodepath.modules.manager.ModuleManager`.

Example:
    Minimal module implementation::

        class HelloModule(Module):
            @property
            def name(self) -> str:
                return "hello"

            def setup(self, dispatcher, commands):
                commands.register("hello", self.name, "greet")
                dispatcher.subscribe(self.name, "greet", lambda event: "hi")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from nodepath.models import GlobalConfig

if TYPE_CHECKING:
    from nodepath.modules.events import CommandRegistry, EventDispatcher


class Module(ABC):
    """Base class for all nodepath modules.

    The module lifecycle is:

    1. Instantiation -- the :class:`ModuleManager` calls the no-arg constructor.
    2. :meth:`on_init` -- called once with the global configuration.
    3. :meth:`setup` -- called once to register commands and subscriptions.
    4. Event handlers -- called zero or more times as commands fire.
    5. :meth:`cleanup` -- called once during shutdown.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique module name used for discovery and as event source."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    @property
    def public(self) -> Any:
        """Return the module's public API object, or ``None`` if it has none."""
        return None

    def on_init(self, config: GlobalConfig) -> None:
        """Called once when the module is loaded.

        Args:
            config: The effective configuration, including per-module
                sections such as ``show_tree``.
        """

    def setup(self, dispatcher: EventDispatcher, commands: CommandRegistry) -> None:
        """Register commands and event subscriptions.

        Args:
            dispatcher: The host's event dispatcher.
            commands: The host's command registry.
        """

    def cleanup(self) -> None:
        """Called once during shutdown to release module resources."""
