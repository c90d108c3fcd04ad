"""命令行界面."""

from .render import CLIRenderer

__all__ = ['CLIRenderer']
