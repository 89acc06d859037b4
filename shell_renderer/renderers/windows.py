"""Windows ``cmd.exe`` rendering.

Commands are meant to run from a batch file, so ``%`` is written as ``%%``.
Quoted tokens follow the Microsoft C runtime argv rules: an embedded ``"`` is
written as ``""`` and backslashes are doubled only where they precede a quote.
Because every embedded quote is doubled, cmd's own quote tracking never leaves
the quoted run and ``& | < > ^ ( )`` are taken literally without carets.

A cmd line ends at CR or LF and no escape carries one inside a token, so
``sh_quote`` rejects values containing either with ``ValueError``. ``!`` is
only literal while delayed expansion is off (the cmd default).
"""

from __future__ import annotations

import base64
import ntpath
from dataclasses import dataclass
from typing import ClassVar

from shell_renderer.models import Family
from shell_renderer.renderers import paths
from shell_renderer.renderers.base import Command, as_bytes

BASE64_LINE_WIDTH = 64
OWNER_WRITE = 0o200


def sh_quote(value: str) -> str:
    if "\r" in value or "\n" in value:
        raise ValueError(f"cmd tokens cannot contain line breaks: {value!r}")
    chunks: list[str] = ['"']
    backslashes = 0
    for char in value:
        if char == "\\":
            backslashes += 1
            continue
        if char == '"':
            chunks.append("\\" * (backslashes * 2))
            chunks.append('""')
        else:
            chunks.append("\\" * backslashes)
            chunks.append("%%" if char == "%" else char)
        backslashes = 0
    chunks.append("\\" * (backslashes * 2))
    chunks.append('"')
    return "".join(chunks)


def base64_lines(data: bytes) -> list[str]:
    encoded = base64.b64encode(data).decode("ascii")
    return [
        encoded[start : start + BASE64_LINE_WIDTH]
        for start in range(0, len(encoded), BASE64_LINE_WIDTH)
    ]


@dataclass(frozen=True)
class WindowsRenderer:
    family: ClassVar[Family] = "windows"

    def join(self, *parts: str) -> str:
        return paths.join(ntpath, *parts)

    def split(self, path: str) -> tuple[str, str]:
        return paths.split(ntpath, path)

    def base(self, path: str) -> str:
        return paths.base(ntpath, path)

    def dir(self, path: str) -> str:
        return paths.dirname(ntpath, path)

    def ext(self, path: str) -> str:
        return paths.ext(ntpath, path)

    def is_abs(self, path: str) -> bool:
        return paths.is_abs(ntpath, path)

    def clean(self, path: str) -> str:
        return paths.clean(ntpath, path)

    def from_slash(self, path: str) -> str:
        return paths.from_slash(ntpath, path)

    def to_slash(self, path: str) -> str:
        return paths.to_slash(ntpath, path)

    def split_list(self, value: str) -> list[str]:
        return paths.split_list(ntpath, value)

    def volume_name(self, path: str) -> str:
        return paths.volume_name(ntpath, path)

    def norm_case(self, path: str) -> str:
        return paths.norm_case(ntpath, path)

    def match(self, pattern: str, name: str) -> bool:
        return paths.match(ntpath, pattern, name)

    def same_path(self, left: str, right: str) -> bool:
        return paths.same_path(ntpath, left, right)

    def sh_quote(self, value: str) -> str:
        return sh_quote(value)

    def exe_suffix(self) -> str:
        return ".exe"

    def mkdir(self, dirname: str) -> Command:
        """Create ``dirname``, failing when it already exists.

        Unlike POSIX ``mkdir``, cmd creates missing parent directories too
        while command extensions are on (the default).
        """
        return [f"mkdir {sh_quote(dirname)}"]

    def mkdir_all(self, dirname: str) -> Command:
        quoted = sh_quote(dirname)
        return [f"if not exist {quoted} mkdir {quoted}"]

    def write_file(self, filename: str, data: bytes | str) -> Command:
        target = sh_quote(filename)
        lines = base64_lines(as_bytes(data))
        if not lines:
            return [f"type nul > {target}"]

        staging = sh_quote(f"{filename}.b64")
        # Redirection goes first so a trailing digit is never read as a handle.
        commands = [f"type nul > {staging}"]
        commands.extend(f">> {staging} echo {line}" for line in lines)
        commands.append(f"certutil -f -decode {staging} {target} >nul")
        commands.append(f"del {staging}")
        return commands

    def chmod(self, path: str, perm: int) -> Command:
        """Approximate ``perm`` with the read-only attribute.

        Only the owner write bit is honoured: clear sets ``+R``, set clears it.
        Group, other and execute bits have no cmd equivalent and are dropped.
        """
        flag = "-R" if perm & OWNER_WRITE else "+R"
        return [f"attrib {flag} {sh_quote(path)}"]

    def chown(self, path: str, user: str, group: str) -> Command:
        return []

    def touch(self, path: str) -> Command:
        # Creates a missing file; an existing file's timestamp may not change.
        return [f"type nul >> {sh_quote(path)}"]

    def redirect_output(self, filename: str) -> Command:
        return []

    def script_filename(self, name: str, dirname: str) -> str:
        return self.join(dirname, f"{name}.bat")

    def script_permissions(self) -> int:
        return 0o666

    def render_script(self, commands: list[str]) -> str:
        return "\r\n".join(["@echo off", *commands]) + "\r\n"
