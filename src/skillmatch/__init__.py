"""
skillmatch - skill registry and request matcher

Loads a directory of SKILL.md skill documents into an immutable registry
and picks the skill most relevant to a natural-language request.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skillmatch")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
