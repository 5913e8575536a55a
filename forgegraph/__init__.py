"""Version graphs and release tooling for forge projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("forgegraph")
except PackageNotFoundError:
    # running from a source checkout
    __version__ = "0.0.0"
