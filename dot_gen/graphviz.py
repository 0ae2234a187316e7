# dot_gen/graphviz.py
from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .constants import GRAPHVIZ_COMMAND, RENDER_TIMEOUT_SECONDS
from .errors import GraphvizError
from .writer import image_path

LOG = logging.getLogger(__name__)


def render_command(dot_path: Path, fmt: str, out_path: Optional[Path] = None) -> list[str]:
    """`dot -T<fmt> <dot_path> -o <image>`."""
    out = out_path or image_path(dot_path, fmt)
    return [GRAPHVIZ_COMMAND, f"-T{fmt}", str(dot_path), "-o", str(out)]


def render_image(
    dot_path: Path,
    fmt: str,
    *,
    timeout: float = RENDER_TIMEOUT_SECONDS,
) -> Path:
    """Run Graphviz on an already-written DOT file and return the image path.

    A failure here leaves the DOT file in place.
    """
    if shutil.which(GRAPHVIZ_COMMAND) is None:
        raise GraphvizError(
            f"{GRAPHVIZ_COMMAND!r} not found on PATH; install Graphviz to render images"
        )

    out = image_path(dot_path, fmt)
    cmd = render_command(dot_path, fmt, out)
    LOG.debug("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout, check=False
        )
    except subprocess.TimeoutExpired as e:
        raise GraphvizError(f"Graphviz timed out after {timeout:g}s rendering {dot_path}") from e
    except OSError as e:
        raise GraphvizError(f"Cannot run {GRAPHVIZ_COMMAND!r}: {e}") from e

    if proc.returncode != 0:
        detail = proc.stderr.strip()
        raise GraphvizError(
            f"Graphviz rendering failed with exit code {proc.returncode}"
            + (f": {detail}" if detail else "")
        )
    return out
