# topmark:header:start
#
#   project      : TreeShift
#   file         : io.py
#   file_relpath : src/treeshift/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load run options from TOML.

Options can live in a standalone ``treeshift.toml`` or under
``[tool.treeshift]`` in ``pyproject.toml``:

    from = "src/app.css"
    to = "dist/app.css"

    [map]
    inline = false
    annotation = true
    sources_content = true

Parsing is done with `tomlkit`. Unreadable or malformed files are logged and
treated as empty; values of the wrong type are logged and replaced by their
defaults, so a config mistake never aborts a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from treeshift.config.keys import Toml
from treeshift.config.logging import get_logger
from treeshift.config.options import MapOptions, ProcessOptions

if TYPE_CHECKING:
    from treeshift.config.logging import TreeshiftLogger

TomlTable = dict[str, Any]

logger: TreeshiftLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document.

    Returns:
        The parsed TOML content, or an empty dict if the file cannot be read
        or parsed (the failure is logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def get_optional_string(table: TomlTable, key: str) -> str | None:
    """Return ``table[key]`` if it is a non-empty string, else ``None``.

    A present value of another type is logged as a warning and ignored.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    logger.warning("Expected a string for %r, got %s; ignoring", key, type(value).__name__)
    return None


def get_bool(table: TomlTable, key: str, default: bool) -> bool:
    """Return ``table[key]`` if it is a bool, else ``default`` (logging bad types)."""
    value: Any = table.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    logger.warning(
        "Expected a boolean for %r, got %s; using default (%s)", key, type(value).__name__, default
    )
    return default


def map_options_from_value(value: Any) -> MapOptions | None:
    """Build `MapOptions` from the value of the ``map`` key.

    ``true`` enables a default map, ``false`` (or ``enabled = false`` inside the
    table) disables it, and a table overrides individual fields.
    """
    if value is None or value is False:
        return None
    if value is True:
        return MapOptions()
    if not isinstance(value, dict):
        logger.warning("Expected a table or boolean for %r; source map disabled", Toml.SECTION_MAP)
        return None
    table: TomlTable = cast("TomlTable", value)
    if not get_bool(table, Toml.KEY_MAP_ENABLED, True):
        return None

    defaults = MapOptions()
    annotation_raw: Any = table.get(Toml.KEY_MAP_ANNOTATION, defaults.annotation)
    annotation: bool | str
    if isinstance(annotation_raw, (bool, str)):
        annotation = annotation_raw
    else:
        logger.warning(
            "Expected a boolean or string for %r; using default", Toml.KEY_MAP_ANNOTATION
        )
        annotation = defaults.annotation

    return MapOptions(
        inline=get_bool(table, Toml.KEY_MAP_INLINE, defaults.inline),
        annotation=annotation,
        sources_content=get_bool(table, Toml.KEY_MAP_SOURCES_CONTENT, defaults.sources_content),
    )


def options_from_table(table: TomlTable) -> ProcessOptions:
    """Build `ProcessOptions` from a parsed ``[tool.treeshift]``-shaped table."""
    opts = ProcessOptions(
        from_path=get_optional_string(table, Toml.KEY_FROM),
        to_path=get_optional_string(table, Toml.KEY_TO),
        map=map_options_from_value(table.get(Toml.SECTION_MAP)),
        plugin=get_optional_string(table, Toml.KEY_PLUGIN),
    )
    logger.debug("Options from table: %s", opts)
    return opts


def extract_treeshift_table(path: Path, data: TomlTable) -> TomlTable:
    """Return the TreeShift section of a parsed config file.

    For ``pyproject.toml`` this is ``[tool.treeshift]`` (empty if absent);
    any other file is taken as a whole.
    """
    if path.name != Toml.PYPROJECT_FILENAME:
        return data
    section: Any = data
    for key in Toml.PYPROJECT_SECTION:
        section = section.get(key) if isinstance(section, dict) else None
    return cast("TomlTable", section) if isinstance(section, dict) else {}


def load_options(path: Path | str) -> ProcessOptions:
    """Load `ProcessOptions` from a config file or a directory.

    When ``path`` is a directory, ``treeshift.toml`` is preferred over
    ``pyproject.toml``. A missing config yields default options.
    """
    p = Path(path)
    if p.is_dir():
        for name in (Toml.CONFIG_FILENAME, Toml.PYPROJECT_FILENAME):
            candidate: Path = p / name
            if candidate.is_file():
                p = candidate
                break
        else:
            logger.debug("No TreeShift config found in %s; using defaults", path)
            return ProcessOptions()

    logger.info("Loading TreeShift options from %s", p)
    return options_from_table(extract_treeshift_table(p, load_toml_dict(p)))
