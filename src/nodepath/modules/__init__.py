"""Module system for nodepath -- events, commands, and pluggable modules.

Key classes:

* :class:`Module` -- Abstract base class that all modules extend.
* :class:`ModuleManager` -- Discovers, loads, and manages module lifecycle.
* :class:`EventDispatcher` -- Explicit ``(source, event)`` subscriptions.
* :class:`CommandRegistry` -- Named commands that raise events.
* :class:`Event` -- The value delivered to event handlers.

Example:
    Typical usage from the CLI entry point::

        from nodepath.modules import ModuleManager

        manager = ModuleManager()
        manager.discover(config)
        manager.run_command("show-tree", document)
"""

from nodepath.modules.base import Module
from nodepath.modules.events import CommandRegistry, Event, EventDispatcher
from nodepath.modules.manager import ModuleManager

__all__ = ["Module", "CommandRegistry", "Event", "EventDispatcher", "ModuleManager"]
