"""Command-line interface for modplan."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import generate_plan_artifacts
from contract.validation import validate_artifacts
from resolve.errors import ResolutionError
from rules.config import ConfigError, load_config
from scan.manifest import ManifestError
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modplan")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser("plan", help="Resolve and write a build plan")
    _add_common_paths(plan_parser)
    plan_parser.add_argument(
        "--manifest",
        default=None,
        help="Descriptor manifest (default: config manifest)",
    )
    plan_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )
    plan_parser.add_argument(
        "--parallel",
        action="store_true",
        default=None,
        help="Run independent resolver passes concurrently",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--manifest",
        default=None,
        help="Descriptor manifest (default: config manifest)",
    )
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _report_resolution_error(exc: ResolutionError) -> int:
    sys.stderr.write(f"error: {exc.kind}: {exc}\n")
    return 1


def _handle_plan(
    root: Path, manifest: str | None, out_dir: str | None, parallel: bool | None
) -> int:
    resolved_out_dir = _resolve_output_dir(out_dir)
    try:
        generate_plan_artifacts(
            root=root,
            out_dir=resolved_out_dir,
            manifest=manifest,
            parallel=parallel,
        )
    except (ConfigError, ManifestError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except ResolutionError as exc:
        return _report_resolution_error(exc)
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    try:
        resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, manifest: str | None, artifacts_dir: str | None) -> int:
    try:
        resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    try:
        result = verify_determinism(
            root=root, artifacts_dir=resolved_artifacts_dir, manifest=manifest
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (ConfigError, ManifestError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except ResolutionError as exc:
        return _report_resolution_error(exc)
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).expanduser().resolve()

    if args.command == "plan":
        return _handle_plan(root, args.manifest, args.out_dir, args.parallel)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.manifest, args.artifacts_dir)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
