# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TreeShift runs.

Modules:
    - `options`: immutable `ProcessOptions` / `MapOptions`.
    - `io`: TOML loading (``treeshift.toml`` / ``[tool.treeshift]``).
    - `keys`: canonical TOML key names.
    - `logging`: TRACE-capable logger and colored formatter.
"""

from __future__ import annotations

from treeshift.config.options import MapOptions, ProcessOptions

__all__ = [
    "MapOptions",
    "ProcessOptions",
]
