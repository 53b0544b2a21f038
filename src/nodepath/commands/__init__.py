"""Built-in CLI sub-commands for nodepath."""
