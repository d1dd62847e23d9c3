from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from artifacts.write import generate_plan_artifacts
from verify.verify import DeterminismResult, verify_determinism

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "plugin_project"


def _copy_fixture(root: Path) -> None:
    shutil.copytree(FIXTURE_ROOT, root)


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_fixture(project_root)

    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=project_root, artifacts_dir=missing_dir)


def test_verify_determinism_passes_on_fresh_artifacts(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_fixture(project_root)
    artifacts_dir = tmp_path / "artifacts"
    generate_plan_artifacts(root=project_root, out_dir=artifacts_dir)

    result = verify_determinism(root=project_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_detects_edited_manifest(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_fixture(project_root)
    artifacts_dir = tmp_path / "artifacts"
    generate_plan_artifacts(root=project_root, out_dir=artifacts_dir)

    manifest = project_root / "modules.toml"
    manifest.write_text(
        manifest.read_text(encoding="utf-8") + '\n[[module]]\nname = "Standalone"\n',
        encoding="utf-8",
    )

    result = verify_determinism(root=project_root, artifacts_dir=artifacts_dir)

    assert not result.ok
    assert result.mismatches == ("build_plan.json",)


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    project_root = tmp_path / "project"
    _copy_fixture(project_root)

    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    for rel_path, content in (
        ("b.txt", "b-original"),
        ("a.txt", "a-original"),
        ("stale.txt", "stale"),
    ):
        path = artifacts_dir / rel_path
        path.write_text(content, encoding="utf-8")

    def _fake_generate_plan_artifacts(
        *, root: Path, out_dir: Path, manifest: str | None = None
    ) -> dict[str, object]:
        (out_dir / "a.txt").write_text("a-original", encoding="utf-8")
        (out_dir / "b.txt").write_text("b-regenerated", encoding="utf-8")
        (out_dir / "new.txt").write_text("new", encoding="utf-8")
        return {"artifacts": [str(out_dir / "a.txt"), str(out_dir / "b.txt")]}

    monkeypatch.setattr(
        "verify.verify.generate_plan_artifacts",
        _fake_generate_plan_artifacts,
    )

    result = verify_determinism(root=project_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.txt",),
        missing=("stale.txt",),
        extra=("new.txt",),
    )
