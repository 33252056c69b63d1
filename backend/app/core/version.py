"""Read the application version from the VERSION file."""

from pathlib import Path

_CANDIDATES = (
    # Container layout: /app/app/core/version.py -> /app/VERSION
    Path(__file__).parent.parent.parent / "VERSION",
    # Source checkout: backend/app/core/version.py -> ./VERSION
    Path(__file__).parent.parent.parent.parent / "VERSION",
)


def get_version() -> str:
    for version_file in _CANDIDATES:
        if version_file.exists():
            return version_file.read_text().strip()
    return "0.0.0"


__version__ = get_version()
