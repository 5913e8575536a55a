"""
forge CLI integration.

ForgeService wraps the external ``forge`` release tool; all version, bump,
build and changelog data shown by forgegraph comes from it.
"""

from .service import ForgeService, parse_forge_output

__all__ = ["ForgeService", "parse_forge_output"]
