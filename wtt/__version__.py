"""Version information for wtt."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wtt")
except PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "0.0.0+unknown"
