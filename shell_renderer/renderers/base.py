from __future__ import annotations

from typing import Protocol, runtime_checkable

from shell_renderer.models import Family

Command = list[str]


@runtime_checkable
class PathRenderer(Protocol):
    """Path syntax and quoting for one shell family."""

    family: Family

    def join(self, *parts: str) -> str: ...

    def split(self, path: str) -> tuple[str, str]: ...

    def base(self, path: str) -> str: ...

    def dir(self, path: str) -> str: ...

    def ext(self, path: str) -> str: ...

    def is_abs(self, path: str) -> bool: ...

    def clean(self, path: str) -> str: ...

    def from_slash(self, path: str) -> str: ...

    def to_slash(self, path: str) -> str: ...

    def split_list(self, value: str) -> list[str]: ...

    def volume_name(self, path: str) -> str: ...

    def norm_case(self, path: str) -> str: ...

    def match(self, pattern: str, name: str) -> bool: ...

    def same_path(self, left: str, right: str) -> bool: ...

    def sh_quote(self, value: str) -> str:
        """Wrap ``value`` so the shell reads it back as exactly one literal token."""
        ...

    def exe_suffix(self) -> str: ...


@runtime_checkable
class Commands(Protocol):
    """Filesystem commands rendered as shell fragments, never executed."""

    def mkdir(self, dirname: str) -> Command: ...

    def mkdir_all(self, dirname: str) -> Command: ...

    def write_file(self, filename: str, data: bytes | str) -> Command:
        """Write ``data`` verbatim, creating or truncating, with umask permissions."""
        ...

    def chmod(self, path: str, perm: int) -> Command: ...

    def chown(self, path: str, user: str, group: str) -> Command: ...

    def touch(self, path: str) -> Command: ...

    def redirect_output(self, filename: str) -> Command: ...


@runtime_checkable
class Renderer(PathRenderer, Commands, Protocol):
    def script_filename(self, name: str, dirname: str) -> str: ...

    def script_permissions(self) -> int: ...

    def render_script(self, commands: list[str]) -> str: ...


def as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)
