"""Renderer variants, one per shell family."""

from shell_renderer.renderers.base import Command, Commands, PathRenderer, Renderer
from shell_renderer.renderers.posix import PosixRenderer
from shell_renderer.renderers.windows import WindowsRenderer

__all__ = [
    "Command",
    "Commands",
    "PathRenderer",
    "PosixRenderer",
    "Renderer",
    "WindowsRenderer",
]
