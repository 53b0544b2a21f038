"""nodepath -- Describe the syntax-tree path under the cursor.

Given a document and a cursor position, nodepath walks from the syntax node
under the cursor up to the tree root and prints the chain of node labels::

    $ nodepath show app.py --line 12 --column 8
    module → function_definition → block → return_statement

The labelling core (:mod:`nodepath.labeler`) works on any tree whose nodes
expose ``parent()`` and ``label()``. Tree-sitter is the default provider.

Modules:
    app: Typer application and CLI entry point.
    labeler: Root-to-node path reducer.
    nodes: Node adapters (in-memory and tree-sitter).
    providers: Documents and syntax tree providers.
    models: Pydantic configuration models.
    config: XDG-aware configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
    modules: Event dispatcher, command registry and pluggable modules.
"""

__version__ = "0.1.0"
