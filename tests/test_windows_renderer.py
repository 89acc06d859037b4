from __future__ import annotations

import base64
import dataclasses
import re
import subprocess
import sys
from pathlib import Path

import pytest

from shell_renderer import WindowsRenderer, new_renderer
from shell_renderer.renderers.windows import BASE64_LINE_WIDTH

renderer = WindowsRenderer()

FUZZ_CORPUS = [
    "",
    " ",
    "\t \t",
    "plain",
    'say "hi"',
    '""',
    '"',
    "it's fine",
    "C:\\Program Files\\",
    "trailing\\",
    'slash before quote\\"',
    "\\\\server\\share",
    "100% sure %PATH%",
    "%%",
    "a & b | c > d < e",
    "^caret^ (parens)",
    "a; b, c = d",
    "$HOME `id`",
    "unicode é中",
]

LINE_BREAK_CORPUS = [
    "line\nbreak",
    "\r\n",
    "trailing newline\n",
    "carriage\rreturn",
    "a\r\ndel /q C:\\*",
]

_CMD_METACHARACTERS = set("&|<>^()")


def _batch_unquote(token: str) -> str:
    """Read a token back the way a batch file and the C runtime argv parser do."""
    text = token.replace("%%", "%")
    result: list[str] = []
    in_quotes = False
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\\":
            end = index
            while end < len(text) and text[end] == "\\":
                end += 1
            count = end - index
            if end < len(text) and text[end] == '"':
                result.append("\\" * (count // 2))
                if count % 2:
                    result.append('"')
                    end += 1
            else:
                result.append("\\" * count)
            index = end
            continue
        if char == '"':
            if in_quotes and text[index + 1 : index + 2] == '"':
                result.append('"')
                index += 2
                continue
            in_quotes = not in_quotes
            index += 1
            continue
        if not in_quotes and char in " \t":
            raise AssertionError(f"token splits on unquoted whitespace: {token!r}")
        result.append(char)
        index += 1
    assert not in_quotes, f"unterminated quote in {token!r}"
    return "".join(result)


def _cmd_sees_metacharacter_unquoted(token: str) -> bool:
    quoted = False
    for char in token:
        if char == '"':
            quoted = not quoted
        elif char in _CMD_METACHARACTERS and not quoted:
            return True
    return False


@pytest.mark.parametrize("value", FUZZ_CORPUS)
def test_sh_quote_round_trips_through_batch_parsing(value: str) -> None:
    quoted = renderer.sh_quote(value)

    assert quoted.startswith('"')
    assert quoted.endswith('"')
    assert _batch_unquote(quoted) == value


@pytest.mark.parametrize("value", FUZZ_CORPUS)
def test_sh_quote_keeps_metacharacters_inside_cmd_quotes(value: str) -> None:
    quoted = renderer.sh_quote(value)

    assert quoted.count('"') % 2 == 0
    assert not _cmd_sees_metacharacter_unquoted(quoted)


def test_sh_quote_doubles_embedded_quotes() -> None:
    assert renderer.sh_quote('say "hi"') == '"say ""hi"""'
    assert renderer.sh_quote("50%") == '"50%%"'
    assert renderer.sh_quote("C:\\dir\\") == '"C:\\dir\\\\"'
    assert renderer.sh_quote("") == '""'


def test_mkdir_commands() -> None:
    assert renderer.mkdir("C:\\App\\lib") == ['mkdir "C:\\App\\lib"']
    assert renderer.mkdir_all("C:\\App\\lib") == [
        'if not exist "C:\\App\\lib" mkdir "C:\\App\\lib"'
    ]


@pytest.mark.parametrize(
    ("perm", "expected"),
    [
        (0o644, 'attrib -R "C:\\f.txt"'),
        (0o755, 'attrib -R "C:\\f.txt"'),
        (0o444, 'attrib +R "C:\\f.txt"'),
        (0o400, 'attrib +R "C:\\f.txt"'),
        (0o000, 'attrib +R "C:\\f.txt"'),
    ],
)
def test_chmod_maps_owner_write_bit_to_read_only_attribute(perm: int, expected: str) -> None:
    assert renderer.chmod("C:\\f.txt", perm) == [expected]


def test_chown_and_redirect_have_no_cmd_equivalent() -> None:
    assert renderer.chown("C:\\f", "user", "group") == []
    assert renderer.redirect_output("C:\\log.txt") == []


def test_touch_creates_without_truncating() -> None:
    assert renderer.touch("C:\\marker") == ['type nul >> "C:\\marker"']


def test_write_empty_file() -> None:
    assert renderer.write_file("C:\\empty", b"") == ['type nul > "C:\\empty"']


def _decode_write_file(commands: list[str], filename: str) -> bytes:
    staging = renderer.sh_quote(f"{filename}.b64")
    target = renderer.sh_quote(filename)
    assert commands[0] == f"type nul > {staging}"
    assert commands[-2] == f"certutil -f -decode {staging} {target} >nul"
    assert commands[-1] == f"del {staging}"

    prefix = f">> {staging} echo "
    payload: list[str] = []
    for command in commands[1:-2]:
        assert command.startswith(prefix)
        line = command[len(prefix) :]
        assert re.fullmatch(r"[A-Za-z0-9+/=]+", line)
        assert len(line) <= BASE64_LINE_WIDTH
        payload.append(line)
    return base64.b64decode("".join(payload))


@pytest.mark.parametrize(
    "data",
    [
        b"x",
        b"hello\r\nworld\r\n",
        b"\x00\x00nul bytes\x00",
        bytes(range(256)) * 3,
        b'%PATH% & "quotes" ^ | > <',
    ],
)
def test_write_file_payload_decodes_to_original_bytes(data: bytes) -> None:
    filename = "C:\\Program Files\\app\\data 100%.bin"

    commands = renderer.write_file(filename, data)

    assert _decode_write_file(commands, filename) == data


def test_write_file_accepts_text_as_utf8() -> None:
    assert renderer.write_file("f", "é") == renderer.write_file("f", "é".encode())


def test_script_helpers() -> None:
    assert renderer.script_filename("bootstrap", "C:\\App") == "C:\\App\\bootstrap.bat"
    assert renderer.render_script(["mkdir x", "mkdir y"]) == "@echo off\r\nmkdir x\r\nmkdir y\r\n"


def test_factory_returns_windows_renderer() -> None:
    assert new_renderer("windows").sh_quote('say "hi"') == '"say ""hi"""'


needs_cmd = pytest.mark.skipif(sys.platform != "win32", reason="requires cmd.exe")


@needs_cmd
@pytest.mark.parametrize(
    "data",
    [b"plain text\r\n", b"\x00\x00nul bytes\x00", bytes(range(256))],
)
def test_write_file_reproduces_bytes_in_real_cmd(data: bytes, tmp_path: Path) -> None:
    target = tmp_path / "out 100%.bin"
    script = tmp_path / "write.bat"
    rendered = renderer.render_script(renderer.write_file(str(target), data))
    script.write_bytes(rendered.encode("utf-8"))

    completed = subprocess.run(["cmd", "/c", str(script)], check=False, capture_output=True)

    assert completed.returncode == 0, completed.stderr
    assert target.read_bytes() == data


@needs_cmd
def test_mkdir_all_is_idempotent_in_real_cmd(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b c" / "d&e"
    script = tmp_path / "mkdir.bat"
    script.write_bytes(renderer.render_script(renderer.mkdir_all(str(target))).encode("utf-8"))

    first = subprocess.run(["cmd", "/c", str(script)], check=False, capture_output=True)
    second = subprocess.run(["cmd", "/c", str(script)], check=False, capture_output=True)

    assert first.returncode == 0, first.stderr
    assert second.returncode == 0, second.stderr
    assert target.is_dir()


@pytest.mark.parametrize("value", LINE_BREAK_CORPUS)
def test_sh_quote_rejects_line_breaks(value: str) -> None:
    with pytest.raises(ValueError, match="line breaks"):
        renderer.sh_quote(value)


@pytest.mark.parametrize("value", LINE_BREAK_CORPUS)
def test_commands_reject_paths_with_line_breaks(value: str) -> None:
    for render in (
        renderer.mkdir,
        renderer.mkdir_all,
        renderer.touch,
        lambda path: renderer.chmod(path, 0o644),
        lambda path: renderer.write_file(path, b"data"),
        lambda path: renderer.write_file(path, b""),
    ):
        with pytest.raises(ValueError):
            render(value)


def test_write_file_content_may_contain_line_breaks() -> None:
    commands = renderer.write_file("C:\\notes.txt", b"one\r\ntwo\ncalc.exe\r\n")

    assert all("\r" not in command and "\n" not in command for command in commands)
    assert _decode_write_file(commands, "C:\\notes.txt") == b"one\r\ntwo\ncalc.exe\r\n"


def test_renderer_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        renderer.family = "posix"  # type: ignore[misc]
