"""Built-in ``show-tree`` module.

Registers the ``show-tree`` command, which prints the chain of syntax node
types from the document root down to the node under the cursor.
"""

from nodepath.modules.show_tree.module import ShowTreeApi, ShowTreeModule

__all__ = ["ShowTreeApi", "ShowTreeModule"]
