# topmark:header:start
#
#   project      : TreeShift
#   file         : test_config_io.py
#   file_relpath : tests/config/test_config_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for loading run options from TOML files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tests.conftest import parametrize
from treeshift.config.io import (
    extract_treeshift_table,
    load_options,
    load_toml_dict,
    map_options_from_value,
)
from treeshift.config.options import MapOptions, ProcessOptions

if TYPE_CHECKING:
    from pathlib import Path


def test_load_standalone_config(tmp_path: Path) -> None:
    cfg: Path = tmp_path / "treeshift.toml"
    cfg.write_text(
        'from = "src/app.css"\n'
        'to = "dist/app.css"\n'
        'plugin = "cli"\n'
        "\n"
        "[map]\n"
        "inline = false\n"
        'annotation = "app.css.map"\n'
        "sources_content = false\n",
        encoding="utf-8",
    )

    opts: ProcessOptions = load_options(cfg)

    assert opts.from_path == "src/app.css"
    assert opts.to_path == "dist/app.css"
    assert opts.plugin == "cli"
    assert opts.map == MapOptions(inline=False, annotation="app.css.map", sources_content=False)


def test_directory_prefers_standalone_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.treeshift]\nfrom = "pyproject.css"\n', encoding="utf-8"
    )
    (tmp_path / "treeshift.toml").write_text('from = "standalone.css"\n', encoding="utf-8")

    assert load_options(tmp_path).from_path == "standalone.css"


def test_pyproject_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.treeshift]\nfrom = "in.css"\nmap = true\n',
        encoding="utf-8",
    )

    opts: ProcessOptions = load_options(tmp_path)

    assert opts.from_path == "in.css"
    assert opts.map == MapOptions()


def test_pyproject_without_section_gives_defaults(tmp_path: Path) -> None:
    cfg: Path = tmp_path / "pyproject.toml"
    cfg.write_text('[project]\nname = "x"\n', encoding="utf-8")

    assert extract_treeshift_table(cfg, load_toml_dict(cfg)) == {}
    assert load_options(cfg) == ProcessOptions()


def test_empty_directory_gives_defaults(tmp_path: Path) -> None:
    assert load_options(tmp_path) == ProcessOptions()


def test_malformed_toml_is_treated_as_empty(tmp_path: Path) -> None:
    cfg: Path = tmp_path / "treeshift.toml"
    cfg.write_text("from = [unterminated\n", encoding="utf-8")

    assert load_toml_dict(cfg) == {}
    assert load_options(cfg) == ProcessOptions()


def test_missing_file_is_treated_as_empty(tmp_path: Path) -> None:
    assert load_toml_dict(tmp_path / "absent.toml") == {}


def test_wrong_types_fall_back_to_defaults(tmp_path: Path) -> None:
    cfg: Path = tmp_path / "treeshift.toml"
    cfg.write_text('from = 3\n\n[map]\ninline = "yes"\nannotation = 1\n', encoding="utf-8")

    opts: ProcessOptions = load_options(cfg)

    assert opts.from_path is None
    assert opts.map == MapOptions()


@parametrize(
    ("value", "expected"),
    [
        (None, None),
        (False, None),
        (True, MapOptions()),
        ({"enabled": False, "inline": False}, None),
        ({"inline": False}, MapOptions(inline=False)),
        ({"annotation": False}, MapOptions(annotation=False)),
        ("yes", None),
    ],
)
def test_map_options_from_value(value: Any, expected: MapOptions | None) -> None:
    assert map_options_from_value(value) == expected
