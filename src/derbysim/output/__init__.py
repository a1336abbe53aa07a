"""Output formatting and export."""

from .console import ConsoleOutput
from .export import Exporter
from .formatting import format_elapsed

__all__ = ["ConsoleOutput", "Exporter", "format_elapsed"]
