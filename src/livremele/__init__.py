"""Top-level package for LivreMêlé.

Provides subpackages:
- livremele.core – immutable page/layout models and the error hierarchy
- livremele.ingest – traversal, asset registry, SVG transformation, sequencing
- livremele.layout – two-page spread layout and navigation state
- livremele.cli – command-line front end
"""

def _get_version() -> str:
    """Get version from the source checkout's pyproject.toml, else installed metadata."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        in_project = False
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped.startswith("["):
                in_project = stripped == "[project]"
            elif in_project and stripped.startswith("version"):
                # version = "0.3.0"
                return stripped.split("=", 1)[1].strip().strip("\"'")

    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("livremele")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__copyright__ = "Copyright 2026 LivreMêlé contributors"

from livremele.core.errors import FatalIngestError, IngestError  # noqa: E402
from livremele.core.models import BookLayoutConfig, PageDocument, SpreadResult  # noqa: E402
from livremele.ingest import process_files, process_files_sync  # noqa: E402
from livremele.layout import BookNavigator, compute_spread, total_spreads  # noqa: E402

__all__: list[str] = [
    "__version__",
    "__copyright__",
    "BookLayoutConfig",
    "BookNavigator",
    "FatalIngestError",
    "IngestError",
    "PageDocument",
    "SpreadResult",
    "compute_spread",
    "process_files",
    "process_files_sync",
    "total_spreads",
]
