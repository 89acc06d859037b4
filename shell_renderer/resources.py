from __future__ import annotations

from importlib.resources import files
from importlib.resources.abc import Traversable


def _data_root() -> Traversable:
    return files("shell_renderer").joinpath("data")


def read_data(name: str) -> str:
    data_path = _data_root().joinpath(f"{name}.yaml")
    if not data_path.is_file():
        raise FileNotFoundError(f"Packaged data not found: {name}")
    return data_path.read_text(encoding="utf-8")
