# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for Declarg help, completion and error output."""
from rich.console import Console
from rich.theme import Theme

declarg_theme = Theme(
    {
        "usage": "bold",
        "heading": "bold yellow",
        "app": "cyan",
        "path": "bold cyan",
        "flag": "bright_cyan",
        "positional": "bright_green",
        "hint": "yellow",
        "marker": "red",
        "muted": "dim",
        "error": "bold red",
    }
)

console = Console(theme=declarg_theme)
error_console = Console(theme=declarg_theme, stderr=True)
