# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/sourcemap/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source-map generation.

Design:
    - `MapGenerator` runs the stringifier once and records mappings through a
      `MapBuilder` while the text is produced.
    - The resulting `SourceMap` is immutable and queryable; callers serialize
      it with `to_json()` (e.g. to write ``<to>.map`` next to the output).
"""

from __future__ import annotations

from treeshift.sourcemap.generator import MapGenerator
from treeshift.sourcemap.map import MapBuilder, Mapping, SourceMap

__all__ = [
    "MapBuilder",
    "MapGenerator",
    "Mapping",
    "SourceMap",
]
