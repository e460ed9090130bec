# isogit Output Module
# Rich console output

from isogit.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
