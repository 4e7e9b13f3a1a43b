import os
import tempfile
import time
import uuid
from pathlib import Path

import config as cfg


def resolve_destination(output_path: str | os.PathLike | None, extension: str) -> Path:
    """Return an absolute destination; a fresh temp file when no path is given."""
    if output_path:
        return Path(output_path).resolve()
    stamp = int(time.time() * 1000)
    name = f"{cfg.OUTPUT_PREFIX}-{stamp}-{uuid.uuid4().hex[:8]}.{extension}"
    return Path(tempfile.gettempdir()) / name


def write_artifact(destination: Path, content: bytes | str) -> Path:
    # Existing files are overwritten.
    destination.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        destination.write_bytes(content)
    else:
        destination.write_text(content, encoding="utf-8")
    return destination
