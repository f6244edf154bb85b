# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/diagnostic/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-output helpers for diagnostics.

Typed payload schemas live in
[`treeshift.diagnostic.machine.schemas`][treeshift.diagnostic.machine.schemas];
import them from there so callers are explicit about the layer they use.
"""
