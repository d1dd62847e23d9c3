from __future__ import annotations

from pathlib import Path

import pytest

from artifacts.models.artifacts.descriptors import ModuleKind
from rules.config import ConfigError, load_config, resolve_output_dir


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / "modplan.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".modplan"
    assert config.manifest == "modules.toml"
    assert config.parallel_checks is False
    assert config.environment.include_kinds == frozenset(ModuleKind)
    assert config.environment.max_toolchain_version is None


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".modplan"
    assert len(config.layering.rules) == 3


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "output_dir = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_environment_section_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
parallel_checks = true

[environment]
include_kinds = ["runtime"]
max_toolchain_version = 5
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.parallel_checks is True
    assert config.environment.include_kinds == frozenset({ModuleKind.RUNTIME})
    assert config.environment.max_toolchain_version == 5


def test_unknown_module_kind_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[environment]
include_kinds = ["runtime", "server_only"]
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_environment_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[environment]
platform = "Win64"
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_layering_rules_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[layering.rules]]
from = "test"
to = ["runtime", "test"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert len(config.layering.rules) == 1
    assert config.layering.rules[0].from_kind is ModuleKind.TEST
    assert config.layering.rules[0].to == [ModuleKind.RUNTIME, ModuleKind.TEST]


def test_unknown_nested_layering_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[layering.rules]]
from = "test"
to = ["runtime"]
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_runtime_layering_rule_cannot_reach_editor_code(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[layering.rules]]
from = "runtime"
to = ["runtime", "editor_only"]
""".strip(),
    )

    with pytest.raises(ConfigError, match="runtime modules may only depend"):
        load_config(tmp_path)


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="escapes the project root"):
        resolve_output_dir(tmp_path, "../outside")


@pytest.mark.parametrize("output_dir", ["", "~/plans", "/abs/plans"])
def test_resolve_output_dir_rejects_non_relative(
    tmp_path: Path, output_dir: str
) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_inside_root(tmp_path: Path) -> None:
    assert resolve_output_dir(tmp_path, "build/plan") == (
        tmp_path.resolve() / "build" / "plan"
    )
