"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~nodepath.exceptions.NodepathError` subclass.
Editor integrations and shell wrappers can inspect the exit code to tell
failure classes apart without parsing stderr.

Example::

    $ nodepath show notes.xyz
    $ echo $?
    7   # EXIT_UNSUPPORTED_LANGUAGE -- no grammar for this file
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_DOCUMENT_ERROR = 4
"""The document could not be read."""

EXIT_UNSUPPORTED_LANGUAGE = 7
"""No syntax tree grammar is available for the document's content type."""

EXIT_TREE_ERROR = 8
"""A tree description was malformed."""

EXIT_DISPATCH_ERROR = 9
"""A command or event could not be dispatched."""

EXIT_MODULE_ERROR = 10
"""A module failed to load, initialise, or register."""
