"""Config commands -- view and modify the global configuration.

Provides the ``nodepath config`` sub-command group for reading, updating,
and resetting the global configuration file
(:class:`~nodepath.models.GlobalConfig`).
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from nodepath.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


def _coerce(current: Any, value: str) -> Any:
    """Convert *value* to the type of the field's *current* value.

    ``null``/``none`` clear string fields; model validation rejects the
    result for fields that are not optional.
    """
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    if (current is None or isinstance(current, str)) and value.lower() in ("null", "none"):
        return None
    return value


@config_app.command("show")
def config_show() -> None:
    """Show the current global configuration.

    Example::

        nodepath config show
        nodepath --json config show
    """
    from nodepath.config import global_config_path, load_global_config

    config = load_global_config()
    info(f"Config file: {global_config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g. 'show_tree.separator')."
    ),
    value: str = typer.Argument(help="Value to set. Lists are comma-separated."),
) -> None:
    """Set a configuration value.

    Example::

        nodepath config set show_tree.separator /
        nodepath config set show_tree.content_types python,markdown
        nodepath config set modules.disabled show-tree
    """
    from nodepath.config import load_global_config, save_global_config
    from nodepath.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    coerced = _coerce(target[final_key], value)
    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the configuration to defaults."""
    from nodepath.config import save_global_config
    from nodepath.models import GlobalConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
