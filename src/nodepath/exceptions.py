"""Exception hierarchy for nodepath.

All exceptions inherit from :class:`NodepathError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`nodepath.exit_codes`.
The top-level error handler in :func:`nodepath.app.main` catches
``NodepathError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    NodepathError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- DocumentError              (exit 4)
    +-- UnsupportedLanguageError   (exit 7)
    +-- TreeError                  (exit 8)
    +-- DispatchError              (exit 9)
    |   +-- CommandNotFoundError
    |   +-- CommandUnavailableError
    +-- ModuleError                (exit 10)
    +-- ConfigError                (exit 1)
"""

from nodepath.exit_codes import (
    EXIT_DISPATCH_ERROR,
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MODULE_ERROR,
    EXIT_TREE_ERROR,
    EXIT_UNSUPPORTED_LANGUAGE,
)


class NodepathError(Exception):
    """Base exception for all nodepath errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`nodepath.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(NodepathError):
    """Raised for invalid CLI arguments (e.g. a negative cursor line)."""

    exit_code = EXIT_INVALID_USAGE


class DocumentError(NodepathError):
    """Raised when a document cannot be read or decoded."""

    exit_code = EXIT_DOCUMENT_ERROR


class UnsupportedLanguageError(NodepathError):
    """Raised when no grammar is available for a document's content type."""

    exit_code = EXIT_UNSUPPORTED_LANGUAGE


class TreeError(NodepathError):
    """Raised when a hand-written tree description is malformed."""

    exit_code = EXIT_TREE_ERROR


class DispatchError(NodepathError):
    """Raised for invalid subscriptions or command registrations."""

    exit_code = EXIT_DISPATCH_ERROR


class CommandNotFoundError(DispatchError):
    """Raised when invoking a command name nobody registered."""


class CommandUnavailableError(DispatchError):
    """Raised when a command is not allowed for the document's content type."""


class ModuleError(NodepathError):
    """Raised when a module fails to load or is looked up but not loaded."""

    exit_code = EXIT_MODULE_ERROR


class ConfigError(NodepathError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
