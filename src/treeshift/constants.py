# topmark:header:start
#
#   project      : TreeShift
#   file         : constants.py
#   file_relpath : src/treeshift/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TreeShift Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

TREESHIFT_VERSION: str = get_version("treeshift")
