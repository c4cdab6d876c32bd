# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for root selection and directory traversal."""

import os
from pathlib import Path

import pytest

from denolint.config import FilesConfig, LintConfig
from denolint.discovery import build_ignore_policy, select_roots, walk
from denolint.models import RunConfig


def _scan(
    working_dir: Path,
    loaded: LintConfig | None = None,
    scan_roots: tuple[Path, ...] = (),
    default_ignore: Path | None = None,
) -> list[Path]:
    run = RunConfig(
        working_dir=working_dir,
        config_path=working_dir / ".denolint.json",
        scan_roots=scan_roots,
        default_ignore_path=default_ignore,
    )
    policy = build_ignore_policy(run, loaded)
    return list(walk(select_roots(run, loaded), policy))


def _relative(paths: list[Path], root: Path) -> list[str]:
    return sorted(path.relative_to(root).as_posix() for path in paths)


def test_walk_yields_script_files(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, "b.ts", "let b = 1;\n")
    write_file(tmp_path, "a.js", "let a = 1;\n")
    write_file(tmp_path, "README.md", "# readme\n")
    write_file(tmp_path, "pkg/c.tsx", "export {};\n")
    write_file(tmp_path, "pkg/d.cjs", "module.exports = {};\n")
    write_file(tmp_path, ".cache/e.ts", "export {};\n")
    write_file(tmp_path, ".hidden.ts", "export {};\n")

    files = _scan(tmp_path)

    assert _relative(files, tmp_path) == ["a.js", "b.ts", "pkg/c.tsx", "pkg/d.cjs"]
    assert all(path.is_absolute() for path in files)


def test_selected_ignore_file_is_rooted_at_working_dir(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".denolintignore", "/dist\nfixtures/\n*.gen.ts\n")
    write_file(tmp_path, ".eslintignore", "src\n")
    write_file(tmp_path, "dist/out.js")
    write_file(tmp_path, "src/dist/kept.js")
    write_file(tmp_path, "src/fixtures/skip.ts")
    write_file(tmp_path, "src/model.gen.ts")
    write_file(tmp_path, "src/model.ts")

    assert _relative(_scan(tmp_path), tmp_path) == ["src/dist/kept.js", "src/model.ts"]


def test_nested_ignore_files_with_selected_name_apply(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".eslintignore", "*.tmp.ts\n")
    write_file(tmp_path, "lib/.eslintignore", "/local.ts\n")
    write_file(tmp_path, "lib/.denolintignore", "*.ts\n")
    write_file(tmp_path, "lib/local.ts")
    write_file(tmp_path, "lib/other.ts")
    write_file(tmp_path, "lib/scratch.tmp.ts")
    write_file(tmp_path, "local.ts")

    assert _relative(_scan(tmp_path), tmp_path) == ["lib/other.ts", "local.ts"]


def test_fallback_ignore_file_applies_from_working_dir(tmp_path: Path, write_file) -> None:
    fallback = write_file(tmp_path / "tool", "ignore", "vendor\n")
    project = tmp_path / "project"
    write_file(project, "vendor/lib.js")
    write_file(project, "app.js")

    assert _relative(_scan(project, default_ignore=fallback), project) == ["app.js"]


def test_dot_ignore_whitelist_reincludes(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".ignore", "generated/*\n!generated/keep.ts\n")
    write_file(tmp_path, "generated/drop.ts")
    write_file(tmp_path, "generated/keep.ts")

    assert _relative(_scan(tmp_path), tmp_path) == ["generated/keep.ts"]


def test_gitignore_only_honoured_inside_worktree(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".gitignore", "build/\n")
    write_file(tmp_path, "build/out.js")
    write_file(tmp_path, "main.js")

    assert _relative(_scan(tmp_path), tmp_path) == ["build/out.js", "main.js"]

    (tmp_path / ".git").mkdir()
    assert _relative(_scan(tmp_path), tmp_path) == ["main.js"]


def test_selected_ignore_file_applies_to_roots_outside_working_dir(tmp_path: Path, write_file) -> None:
    project = tmp_path / "project"
    write_file(project, ".denolintignore", "*.gen.ts\n")
    other = tmp_path / "other"
    write_file(other, "api.gen.ts")
    write_file(other, "main.ts")
    write_file(other, "nested/schema.gen.ts")

    files = _scan(project, scan_roots=(Path("../other"),))

    assert _relative(files, other) == ["main.ts"]


def test_ancestor_gitignore_applies_in_subpackage(tmp_path: Path, write_file) -> None:
    (tmp_path / ".git").mkdir()
    write_file(tmp_path, ".gitignore", "node_modules/\n")
    app = tmp_path / "packages" / "app"
    write_file(app, "index.ts")
    write_file(app, "node_modules/dep/index.js")

    assert _relative(_scan(app), app) == ["index.ts"]


def test_ancestor_gitignore_above_worktree_is_not_read(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".gitignore", "*.js\n")
    write_file(tmp_path, ".ignore", "vendor/\n")
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    write_file(repo, "main.js")
    write_file(repo, "vendor/lib.ts")

    assert _relative(_scan(repo), repo) == ["main.js"]


def test_overrides_beat_ignore_file_whitelists(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".denolintignore", "!src/generated/\n")
    write_file(tmp_path, "src/generated/api.ts")
    write_file(tmp_path, "src/app.ts")
    write_file(tmp_path, "src/app.test.ts")
    loaded = LintConfig(files=FilesConfig(exclude=("src/generated", "*.test.ts")))

    assert _relative(_scan(tmp_path, loaded), tmp_path) == ["src/app.ts"]


def test_root_precedence_scan_roots_over_config_include(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, "scan/marker_scan.ts")
    write_file(tmp_path, "conf/marker_conf.ts")
    write_file(tmp_path, "extra/marker_extra.ts")
    write_file(tmp_path, "marker_cwd.ts")
    loaded = LintConfig(files=FilesConfig(include=("conf", "extra")))

    from_scan = _scan(tmp_path, loaded, scan_roots=(Path("scan"),))
    from_config = _scan(tmp_path, loaded)
    from_cwd = _scan(tmp_path)

    assert sorted(path.name for path in from_scan) == ["marker_scan.ts"]
    assert sorted(path.name for path in from_config) == ["marker_conf.ts", "marker_extra.ts"]
    assert sorted(path.name for path in from_cwd) == [
        "marker_conf.ts",
        "marker_cwd.ts",
        "marker_extra.ts",
        "marker_scan.ts",
    ]


def test_select_roots_reports_source(tmp_path: Path) -> None:
    run = RunConfig(working_dir=tmp_path, config_path=tmp_path / "cfg.json", scan_roots=(Path("a"), Path("b")))
    roots = select_roots(run, None)

    assert roots.source == "scan"
    assert roots.primary == tmp_path / "a"
    assert roots.extra == (tmp_path / "b",)
    assert list(roots) == [tmp_path / "a", tmp_path / "b"]

    cwd_roots = select_roots(RunConfig(working_dir=tmp_path, config_path=tmp_path / "cfg.json"), LintConfig())
    assert cwd_roots.source == "cwd"
    assert list(cwd_roots) == [tmp_path]


def test_file_root_is_yielded_without_filtering(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, ".denolintignore", "notes.txt\n")
    target = write_file(tmp_path, "notes.txt", "debugger;\n")

    assert _scan(tmp_path, scan_roots=(Path("notes.txt"),)) == [target]


def test_missing_roots_are_skipped(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, "real/a.ts")

    files = _scan(tmp_path, scan_roots=(Path("missing"), Path("real")))

    assert _relative(files, tmp_path) == ["real/a.ts"]


def test_overlapping_roots_yield_each_file_once(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, "pkg/a.ts")
    write_file(tmp_path, "pkg/sub/b.ts")

    files = _scan(tmp_path, scan_roots=(Path("pkg"), Path("pkg/sub")))

    assert _relative(files, tmp_path) == ["pkg/a.ts", "pkg/sub/b.ts"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinks_are_followed_and_loops_terminate(tmp_path: Path, write_file) -> None:
    outside = tmp_path / "outside"
    write_file(outside, "shared.ts")
    write_file(outside, "single.js")
    project = tmp_path / "project"
    write_file(project, "main.ts")
    (project / "linked").symlink_to(outside, target_is_directory=True)
    (project / "alias.js").symlink_to(outside / "single.js")
    (project / "loop").symlink_to(project, target_is_directory=True)
    (project / "broken.ts").symlink_to(project / "nowhere.ts")

    files = _scan(project)

    assert _relative(files, project) == ["alias.js", "linked/shared.ts", "linked/single.js", "main.ts"]


def test_repeated_walks_are_independent(tmp_path: Path, write_file) -> None:
    write_file(tmp_path, "a.ts")
    write_file(tmp_path, "b/c.ts")

    assert sorted(_scan(tmp_path)) == sorted(_scan(tmp_path))
