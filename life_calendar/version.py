"""Package version.

A source checkout reads ``[project].version`` from pyproject.toml; an
installed wheel, which ships no pyproject, reports the distribution metadata.
"""

import tomllib
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "life-calendar"

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _version_from_pyproject(pyproject: Path = _PYPROJECT) -> str:
    with open(pyproject, "rb") as f:
        return tomllib.load(f)["project"]["version"]


def get_version() -> str:
    if _PYPROJECT.exists():
        return _version_from_pyproject()
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__: str = get_version()
