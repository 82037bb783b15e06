"""Top-level package for freeout, the document outline engine.

Provides subpackages:
- freeout.core – models, errors and text utilities
- freeout.engine – the outline pipeline
- freeout.readers – Markdown, Typst and PDF readers
"""


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("freeout")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from freeout.core.errors import FreeoutError, FormatError, StructuralError, MissingContentError  # noqa: E402
from freeout.core.models import (  # noqa: E402
    Block,
    BlockRange,
    DistributionMethod,
    Outline,
    OutlineItem,
    Position,
    WordCount,
    WordsTarget,
    WordStatistics,
)
from freeout.engine import OutlineConfig, OutlineEngine, generate_outline  # noqa: E402
from freeout.readers import MarkdownReader, PdfReader, TypstReader, get_reader  # noqa: E402

__all__: list[str] = [
    "__version__",
    "generate_outline",
    "OutlineEngine",
    "OutlineConfig",
    "Outline",
    "OutlineItem",
    "Block",
    "BlockRange",
    "Position",
    "WordCount",
    "WordsTarget",
    "WordStatistics",
    "DistributionMethod",
    "FreeoutError",
    "FormatError",
    "StructuralError",
    "MissingContentError",
    "MarkdownReader",
    "TypstReader",
    "PdfReader",
    "get_reader",
]
