from __future__ import annotations

import logging
import platform

from shell_renderer.models import Family, PlatformTable, default_platform_table
from shell_renderer.renderers import PosixRenderer, Renderer, WindowsRenderer

logger = logging.getLogger("shell_renderer.platforms")

_VARIANTS: dict[Family, type[PosixRenderer] | type[WindowsRenderer]] = {
    "posix": PosixRenderer,
    "windows": WindowsRenderer,
}


class UnknownPlatformError(LookupError):
    """No renderer is registered for the requested platform name."""

    def __init__(self, os_name: str) -> None:
        super().__init__(f'no renderer for "{os_name}"')
        self.os_name = os_name


def host_os_name() -> str:
    return platform.system()


def resolve_family(os_name: str, table: PlatformTable | None = None) -> Family:
    resolved_table = table if table is not None else default_platform_table()
    family = resolved_table.family_for(os_name)
    if family is None:
        raise UnknownPlatformError(os_name)
    return family


def new_renderer(os_name: str = "", table: PlatformTable | None = None) -> Renderer:
    """Return the renderer for ``os_name``, or for the host when it is empty.

    Names are matched case-insensitively against ``table`` (the packaged
    platform table by default). Raises ``UnknownPlatformError`` otherwise.
    """
    requested = os_name
    if not requested:
        requested = host_os_name()
        logger.debug("No platform given, using host platform %s", requested)
    family = resolve_family(requested, table)
    logger.debug("Resolved platform %s to %s renderer", requested, family)
    return _VARIANTS[family]()
