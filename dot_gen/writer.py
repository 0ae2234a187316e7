from __future__ import annotations

from pathlib import Path

from .errors import OutputError


def write_text(path: Path, content: str) -> None:
    """Write UTF-8 text, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Cannot write {path}: {e}") from e


def write_dot(path: Path, content: str) -> None:
    """Write a DOT document. A missing trailing newline is added."""
    write_text(path, content if content.endswith("\n") else content + "\n")


def image_path(dot_path: Path, fmt: str) -> Path:
    """`out/model.dot` + `svg` -> `out/model.svg`."""
    return Path(dot_path).with_suffix("." + fmt.lstrip("."))
