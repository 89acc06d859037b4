from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import ClassVar

from shell_renderer.models import Family
from shell_renderer.renderers import paths
from shell_renderer.renderers.base import Command, as_bytes

_PERCENT = 0x25
_BACKSLASH = 0x5C


def sh_quote(value: str) -> str:
    return "'" + value.replace("'", "'\"'\"'") + "'"


def printf_format(data: bytes) -> str:
    """Encode ``data`` as a printf format string that reproduces it byte for byte."""
    chunks: list[str] = []
    for byte in data:
        if byte == _PERCENT:
            chunks.append("%%")
        elif byte == _BACKSLASH:
            chunks.append("\\\\")
        elif 0x20 <= byte < 0x7F:
            chunks.append(chr(byte))
        else:
            chunks.append(f"\\{byte:03o}")
    encoded = "".join(chunks)
    if encoded.startswith("-"):
        # printf would read a leading dash as an option
        encoded = "\\055" + encoded[1:]
    return encoded


@dataclass(frozen=True)
class PosixRenderer:
    family: ClassVar[Family] = "posix"

    def join(self, *parts: str) -> str:
        return paths.join(posixpath, *parts)

    def split(self, path: str) -> tuple[str, str]:
        return paths.split(posixpath, path)

    def base(self, path: str) -> str:
        return paths.base(posixpath, path)

    def dir(self, path: str) -> str:
        return paths.dirname(posixpath, path)

    def ext(self, path: str) -> str:
        return paths.ext(posixpath, path)

    def is_abs(self, path: str) -> bool:
        return paths.is_abs(posixpath, path)

    def clean(self, path: str) -> str:
        return paths.clean(posixpath, path)

    def from_slash(self, path: str) -> str:
        return paths.from_slash(posixpath, path)

    def to_slash(self, path: str) -> str:
        return paths.to_slash(posixpath, path)

    def split_list(self, value: str) -> list[str]:
        return paths.split_list(posixpath, value)

    def volume_name(self, path: str) -> str:
        return paths.volume_name(posixpath, path)

    def norm_case(self, path: str) -> str:
        return paths.norm_case(posixpath, path)

    def match(self, pattern: str, name: str) -> bool:
        return paths.match(posixpath, pattern, name)

    def same_path(self, left: str, right: str) -> bool:
        return paths.same_path(posixpath, left, right)

    def sh_quote(self, value: str) -> str:
        return sh_quote(value)

    def exe_suffix(self) -> str:
        return ""

    def mkdir(self, dirname: str) -> Command:
        return [f"mkdir -- {sh_quote(dirname)}"]

    def mkdir_all(self, dirname: str) -> Command:
        return [f"mkdir -p -- {sh_quote(dirname)}"]

    def write_file(self, filename: str, data: bytes | str) -> Command:
        encoded = printf_format(as_bytes(data))
        return [f"printf {sh_quote(encoded)} > {sh_quote(filename)}"]

    def chmod(self, path: str, perm: int) -> Command:
        return [f"chmod {perm & 0o7777:04o} -- {sh_quote(path)}"]

    def chown(self, path: str, user: str, group: str) -> Command:
        return [f"chown -- {sh_quote(f'{user}:{group}')} {sh_quote(path)}"]

    def touch(self, path: str) -> Command:
        return [f"touch -- {sh_quote(path)}"]

    def redirect_output(self, filename: str) -> Command:
        return [f"exec >> {sh_quote(filename)} 2>&1"]

    def script_filename(self, name: str, dirname: str) -> str:
        return self.join(dirname, f"{name}.sh")

    def script_permissions(self) -> int:
        return 0o755

    def render_script(self, commands: list[str]) -> str:
        return "\n".join(["#!/bin/sh", "", *commands]) + "\n"
