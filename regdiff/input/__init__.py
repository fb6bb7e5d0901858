"""
Input parsing utilities.

This package contains code for reading segmented regulation versions.
"""

from .parser import find_version, load_versions, parse_versions

__all__ = ["parse_versions", "load_versions", "find_version"]
