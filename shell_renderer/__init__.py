"""Shell-syntax rendering for POSIX sh and Windows cmd targets."""

from shell_renderer.models import (
    PlatformTable,
    default_platform_table,
    format_validation_error,
    load_platform_table,
)
from shell_renderer.platforms import UnknownPlatformError, new_renderer, resolve_family
from shell_renderer.renderers import (
    Command,
    Commands,
    PathRenderer,
    PosixRenderer,
    Renderer,
    WindowsRenderer,
)

__all__ = [
    "Command",
    "Commands",
    "PathRenderer",
    "PlatformTable",
    "PosixRenderer",
    "Renderer",
    "UnknownPlatformError",
    "WindowsRenderer",
    "default_platform_table",
    "format_validation_error",
    "load_platform_table",
    "new_renderer",
    "resolve_family",
]
