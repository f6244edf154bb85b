# topmark:header:start
#
#   project      : TreeShift
#   file         : keys.py
#   file_relpath : src/treeshift/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for TreeShift run options.

These strings are the external configuration API as it appears in
``treeshift.toml`` and in ``[tool.treeshift]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TreeShift configuration."""

    # Locations
    CONFIG_FILENAME: Final[str] = "treeshift.toml"
    PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
    PYPROJECT_SECTION: Final[tuple[str, ...]] = ("tool", "treeshift")

    # Top-level keys
    KEY_FROM: Final[str] = "from"
    KEY_TO: Final[str] = "to"
    KEY_PLUGIN: Final[str] = "plugin"

    # [map]
    SECTION_MAP: Final[str] = "map"

    KEY_MAP_ENABLED: Final[str] = "enabled"
    KEY_MAP_INLINE: Final[str] = "inline"
    KEY_MAP_ANNOTATION: Final[str] = "annotation"
    KEY_MAP_SOURCES_CONTENT: Final[str] = "sources_content"
