"""Module manager -- discovery, loading, and lifecycle management.

:class:`ModuleManager` owns the host side of the module system: one
:class:`~nodepath.modules.events.EventDispatcher`, one
:class:`~nodepath.modules.events.CommandRegistry`, and the set of loaded
modules. Built-in modules are always candidates for loading; third-party
modules are discovered through the ``nodepath.modules`` entry-point group::

    [project.entry-points."nodepath.modules"]
    my-module = "my_package.module:MyModule"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Callable

from nodepath.exceptions import ModuleError
from nodepath.models import Document, GlobalConfig
from nodepath.modules.base import Module
from nodepath.modules.events import CommandRegistry, EventDispatcher

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "nodepath.modules"
"""The entry-point group name used for module discovery."""


def _builtin_modules() -> dict[str, Callable[[], Module]]:
    from nodepath.modules.show_tree import ShowTreeModule

    return {"show-tree": ShowTreeModule}


class ModuleManager:
    """Discovers, loads, and manages the lifecycle of nodepath modules.

    The *enabled* and *disabled* lists in
    :class:`~nodepath.models.ModulesConfig` act as an allowlist/blocklist.
    When *enabled* is non-empty only those modules are loaded; otherwise
    every candidate not in *disabled* is loaded.

    Example:
        Typical usage::

            manager = ModuleManager()
            manager.discover(config)
            manager.run_command("show-tree", document)
    """

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._dispatcher = EventDispatcher()
        self._commands = CommandRegistry(self._dispatcher)

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def commands(self) -> CommandRegistry:
        return self._commands

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self, config: GlobalConfig) -> list[str]:
        """Load built-in modules and those registered as entry points.

        Args:
            config: Configuration whose ``modules.enabled`` and
                ``modules.disabled`` lists control which modules load.

        Returns:
            Names of the modules that were loaded. Modules that fail to load
            are logged as warnings and skipped.
        """
        candidates: dict[str, Callable[[], Any]] = dict(_builtin_modules())
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            # Built-ins are also published as entry points; keep one copy.
            candidates.setdefault(ep.name, ep.load)

        enabled_set = set(config.modules.enabled)
        disabled_set = set(config.modules.disabled)
        loaded_names: list[str] = []

        for name, factory in candidates.items():
            if enabled_set and name not in enabled_set:
                logger.debug("Module '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Module '%s' is disabled, skipping", name)
                continue
            if name in self._modules:
                continue

            try:
                module = factory()
                # Entry points resolve to the class, built-ins to a factory.
                if isinstance(module, type):
                    module = module()
                self.load_module(name, module, config)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load module '%s': %s", name, exc)

        return loaded_names

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_module(self, name: str, module: Module, config: GlobalConfig) -> None:
        """Initialise *module* and let it register commands and subscriptions.

        If ``on_init`` or ``setup`` raises, any commands and subscriptions
        the module registered before failing are removed again and the
        exception propagates.

        Raises:
            ModuleError: If a module with the same *name* is already loaded.
        """
        if name in self._modules:
            raise ModuleError(f"Module '{name}' is already loaded")

        commands_before = {row["name"] for row in self._commands.list_commands()}
        subscribers_before = {
            key: self._dispatcher.subscribers(*key) for key in self._dispatcher.subscriptions()
        }
        try:
            module.on_init(config)
            module.setup(self._dispatcher, self._commands)
        except Exception:
            self._rollback(commands_before, subscribers_before)
            raise
        self._modules[name] = module
        logger.info("Loaded module '%s' v%s", name, module.version)

    def _rollback(
        self,
        commands_before: set[str],
        subscribers_before: dict[tuple[str, str], list[Any]],
    ) -> None:
        for row in self._commands.list_commands():
            if row["name"] not in commands_before:
                self._commands.unregister(row["name"])
        for key in self._dispatcher.subscriptions():
            kept = subscribers_before.get(key, [])
            for handler in self._dispatcher.subscribers(*key):
                if handler not in kept:
                    self._dispatcher.unsubscribe(key[0], key[1], handler)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get_module(self, name: str) -> Module:
        """Return the loaded module registered as *name*.

        Raises:
            ModuleError: If no module with that name is loaded.
        """
        try:
            return self._modules[name]
        except KeyError:
            raise ModuleError(f"Module '{name}' is not loaded") from None

    def get_public(self, name: str) -> Any:
        """Return the public API object of module *name*.

        Raises:
            ModuleError: If the module is not loaded or exposes no public API.
        """
        public = self.get_module(name).public
        if public is None:
            raise ModuleError(f"Module '{name}' has no public API")
        return public

    def list_modules(self) -> list[dict[str, str]]:
        """List loaded modules as ``name``/``version``/``description`` dicts."""
        return [
            {
                "name": module.name,
                "version": module.version,
                "description": module.description,
            }
            for module in self._modules.values()
        ]

    def run_command(self, name: str, document: Document) -> list[Any]:
        """Invoke command *name* on *document*; see :meth:`CommandRegistry.invoke`."""
        return self._commands.invoke(name, document)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Clean up every loaded module and forget them.

        A module whose ``cleanup`` raises is logged; the others still run.
        """
        for name, module in self._modules.items():
            try:
                module.cleanup()
            except Exception as exc:
                logger.warning("Error cleaning up module '%s': %s", name, exc)
        self._modules.clear()
