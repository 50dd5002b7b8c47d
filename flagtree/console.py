# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for flagtree usage and error output."""
from rich.console import Console

from flagtree.themes import get_default_theme

console = Console(stderr=True, theme=get_default_theme())
