"""CLI frontend for histfile.

Commands:
    histfile show    Print the entries of a history file
    histfile purge   Delete a history file
    histfile repl    Prompt loop with persistent history

Example:
    $ histfile show ~/.myapp_history --limit 20
    $ histfile purge ~/.myapp_history --yes
"""

from histfile.frontends.cli.main import main

__all__ = ["main"]
