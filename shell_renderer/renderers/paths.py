"""Path syntax shared by the renderer variants.

Each helper takes the target's path module (``posixpath`` or ``ntpath``) and
follows its separator and drive rules without touching the local filesystem.
Empty and trailing-separator inputs behave like Go's ``path/filepath``:
``clean("")`` and ``base("")`` are ``"."`` and ``join`` drops empty parts.
"""

from __future__ import annotations

import fnmatch
import ntpath
from types import ModuleType


def separators(pathmod: ModuleType) -> str:
    if pathmod is ntpath:
        return "\\/"
    return "/"


def volume_name(pathmod: ModuleType, path: str) -> str:
    if pathmod is not ntpath:
        return ""
    drive, _ = ntpath.splitdrive(path)
    return drive


def clean(pathmod: ModuleType, path: str) -> str:
    if not path:
        return "."
    cleaned = pathmod.normpath(path)
    if pathmod is not ntpath and cleaned.startswith("//"):
        # posixpath keeps a leading double slash; the shell treats it as root
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join(pathmod: ModuleType, *parts: str) -> str:
    kept = [part for part in parts if part]
    if not kept:
        return ""
    return clean(pathmod, pathmod.sep.join(kept))


def split(pathmod: ModuleType, path: str) -> tuple[str, str]:
    seps = separators(pathmod)
    volume = volume_name(pathmod, path)
    index = len(path) - 1
    while index >= len(volume) and path[index] not in seps:
        index -= 1
    return path[: index + 1], path[index + 1 :]


def base(pathmod: ModuleType, path: str) -> str:
    if not path:
        return "."
    seps = separators(pathmod)
    path = path.rstrip(seps)
    path = path[len(volume_name(pathmod, path)) :]
    index = len(path) - 1
    while index >= 0 and path[index] not in seps:
        index -= 1
    path = path[index + 1 :]
    if not path:
        return pathmod.sep
    return path


def dirname(pathmod: ModuleType, path: str) -> str:
    seps = separators(pathmod)
    volume = volume_name(pathmod, path)
    index = len(path) - 1
    while index >= len(volume) and path[index] not in seps:
        index -= 1
    parent = clean(pathmod, path[len(volume) : index + 1])
    if parent == "." and len(volume) > 2:
        return volume
    return volume + parent


def ext(pathmod: ModuleType, path: str) -> str:
    seps = separators(pathmod)
    for index in range(len(path) - 1, -1, -1):
        if path[index] in seps:
            break
        if path[index] == ".":
            return path[index:]
    return ""


def is_abs(pathmod: ModuleType, path: str) -> bool:
    if pathmod is not ntpath:
        return path.startswith("/")
    volume = volume_name(pathmod, path)
    if not volume:
        return False
    if len(volume) > 2:
        # UNC share
        return True
    rest = path[len(volume) :]
    return bool(rest) and rest[0] in separators(pathmod)


def from_slash(pathmod: ModuleType, path: str) -> str:
    return path.replace("/", pathmod.sep)


def to_slash(pathmod: ModuleType, path: str) -> str:
    return path.replace(pathmod.sep, "/")


def split_list(pathmod: ModuleType, value: str) -> list[str]:
    if not value:
        return []
    if pathmod is not ntpath:
        return value.split(pathmod.pathsep)

    # Windows list entries may be double-quoted to protect embedded ';'.
    entries: list[str] = []
    current: list[str] = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        elif char == pathmod.pathsep and not quoted:
            entries.append("".join(current))
            current = []
        else:
            current.append(char)
    entries.append("".join(current))
    return entries


def norm_case(pathmod: ModuleType, path: str) -> str:
    return pathmod.normcase(path)


def match(pathmod: ModuleType, pattern: str, name: str) -> bool:
    """Glob match where ``*`` and ``?`` never cross a separator."""
    pattern = norm_case(pathmod, pattern)
    name = norm_case(pathmod, name)
    pattern_parts = pattern.split(pathmod.sep)
    name_parts = name.split(pathmod.sep)
    if len(pattern_parts) != len(name_parts):
        return False
    return all(
        fnmatch.fnmatchcase(part, glob) for glob, part in zip(pattern_parts, name_parts)
    )


def same_path(pathmod: ModuleType, left: str, right: str) -> bool:
    return norm_case(pathmod, clean(pathmod, left)) == norm_case(pathmod, clean(pathmod, right))
