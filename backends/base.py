from dataclasses import dataclass
from pathlib import Path


@dataclass
class RenderedArtifact:
    format: str
    content: bytes | str
    width: float
    height: float


@dataclass
class RenderResult:
    success: bool
    format: str = "png"
    width: float | None = None
    height: float | None = None
    error: str = ""
    output_path: Path | None = None
