# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Directory traversal producing candidate files lazily."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from pathspec import GitIgnoreSpec

from ..config import LintConfig
from ..models import RunConfig
from ..paths import make_absolute, relative_posix
from .policy import IgnorePolicy

LOGGER = logging.getLogger(__name__)

GITIGNORE_NAME: Final[str] = ".gitignore"
DOT_IGNORE_NAME: Final[str] = ".ignore"
GIT_DIR_NAME: Final[str] = ".git"


@dataclass(frozen=True, slots=True)
class WalkRoots:
    """Roots handed to a walker.

    Attributes:
        primary: First root, the one the walk is anchored at.
        extra: Additional explicit roots layered onto the same walk.
        source: Which input the roots came from (``scan``, ``config``, or
            ``cwd``).
    """

    primary: Path
    extra: tuple[Path, ...] = ()
    source: str = "cwd"

    def __iter__(self) -> Iterator[Path]:
        yield self.primary
        yield from self.extra


def select_roots(run: RunConfig, loaded: LintConfig | None) -> WalkRoots:
    """Choose walk roots by precedence.

    Explicit scan roots win over ``files.include`` from the configuration,
    which wins over the working directory.

    Args:
        run: Run inputs carrying the working directory and scan roots.
        loaded: Loaded configuration, when a config file exists.

    Returns:
        WalkRoots: Absolute roots for the walk.
    """

    if run.scan_roots:
        roots = [make_absolute(root, run.working_dir) for root in run.scan_roots]
        return WalkRoots(primary=roots[0], extra=tuple(roots[1:]), source="scan")
    includes = loaded.files.include if loaded is not None else ()
    if includes:
        roots = [make_absolute(entry, run.working_dir) for entry in includes]
        return WalkRoots(primary=roots[0], extra=tuple(roots[1:]), source="config")
    return WalkRoots(primary=run.working_dir)


@dataclass(frozen=True, slots=True)
class _Matcher:
    """Gitignore rules anchored at ``base``."""

    base: Path
    spec: GitIgnoreSpec

    def check(self, path: Path, *, is_dir: bool) -> bool | None:
        """Return ``True`` to ignore, ``False`` to whitelist, ``None`` when unmatched."""

        relative = relative_posix(path, self.base)
        if not relative or relative == ".":
            return None
        if is_dir:
            relative = f"{relative}/"
        return self.spec.check_file(relative).include


def _read_rules(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        LOGGER.debug("cannot read ignore file %s: %s", path, exc)
        return []


def _compile(base: Path, lines: Iterable[str], origin: Path | str) -> _Matcher | None:
    rules = [line for line in lines if line.strip()]
    if not rules:
        return None
    try:
        return _Matcher(base=base, spec=GitIgnoreSpec.from_lines(rules))
    except ValueError as exc:
        LOGGER.debug("skipping malformed ignore file %s: %s", origin, exc)
        return None


def _git_top(directory: Path) -> Path | None:
    """Return the nearest directory at or above ``directory`` holding ``.git``."""

    for candidate in (directory, *directory.parents):
        if (candidate / GIT_DIR_NAME).exists():
            return candidate
    return None


@dataclass(slots=True)
class _IgnoreStack:
    """Per-directory ignore matchers, computed lazily and cached by directory.

    Ignore files in the ancestors of the walk root are read once up front:
    ``.ignore`` from every ancestor and ``.gitignore`` from the ancestors
    inside the git work tree.
    """

    policy: IgnorePolicy
    git_top: Path | None
    global_matchers: tuple[_Matcher, ...]
    selected_rules: tuple[str, ...] = ()
    _ancestors: tuple[_Matcher, ...] = ()
    _cache: dict[Path, tuple[_Matcher, ...]] = field(default_factory=dict)

    @classmethod
    def build(cls, policy: IgnorePolicy, root: Path) -> _IgnoreStack:
        matchers: list[_Matcher] = []
        selected: list[str] = []
        if policy.ignore_file is not None:
            selected = _read_rules(policy.ignore_file)
            compiled = _compile(policy.working_dir, selected, policy.ignore_file)
            if compiled is not None:
                matchers.append(compiled)
        raw = _compile(policy.working_dir, policy.raw_ignore_rules, "files.exclude")
        if raw is not None:
            matchers.append(raw)
        stack = cls(
            policy=policy,
            git_top=_git_top(root),
            global_matchers=tuple(matchers),
            selected_rules=tuple(selected),
        )
        stack._seed_ancestors(root)
        return stack

    def _seed_ancestors(self, root: Path) -> None:
        inherited: tuple[_Matcher, ...] = ()
        for ancestor in reversed(root.parents):
            own = self._own_matcher(ancestor, ancestor_of_root=True)
            if own is not None:
                inherited = (own, *inherited)
        self._ancestors = inherited

    def _reads_gitignore(self, directory: Path) -> bool:
        return self.git_top is not None and directory.is_relative_to(self.git_top)

    def _own_matcher(self, directory: Path, *, ancestor_of_root: bool = False) -> _Matcher | None:
        names = [DOT_IGNORE_NAME]
        if self._reads_gitignore(directory):
            names.insert(0, GITIGNORE_NAME)
        if self.policy.ignore_filename is not None and not ancestor_of_root:
            names.append(self.policy.ignore_filename)
        lines: list[str] = []
        for name in names:
            candidate = directory / name
            if candidate == self.policy.ignore_file or not candidate.is_file():
                continue
            # later files take priority through last-match-wins
            lines.extend(_read_rules(candidate))
        if not ancestor_of_root and relative_posix(directory, self.policy.working_dir) is None:
            # outside the working directory the selected file applies per visited directory
            lines.extend(self.selected_rules)
        return _compile(directory, lines, directory)

    def push(self, directory: Path, parent: Path | None) -> None:
        """Register ``directory`` inheriting the matchers of ``parent``.

        The walk root (``parent`` is ``None``) inherits the ancestor matchers.
        """

        inherited = self._cache.get(parent, self._ancestors) if parent is not None else self._ancestors
        own = self._own_matcher(directory)
        self._cache[directory] = (own, *inherited) if own is not None else inherited

    def ignored(self, path: Path, *, is_dir: bool, directory: Path) -> bool | None:
        """Return the ignore decision for ``path`` found in ``directory``.

        The deepest directory with a matching rule wins; the run-wide ignore
        file and raw rules are consulted last.
        """

        for matcher in (*self._cache.get(directory, ()), *self.global_matchers):
            decision = matcher.check(path, is_dir=is_dir)
            if decision is not None:
                return decision
        return None


@dataclass(slots=True)
class Walker:
    """Pull-based traversal over one set of roots.

    A walker is single-use: iterating it a second time yields nothing because
    the set of already-yielded files is retained.
    """

    roots: WalkRoots
    policy: IgnorePolicy
    _seen_files: set[Path] = field(default_factory=set)
    _seen_dirs: set[tuple[int, int]] = field(default_factory=set)

    def __iter__(self) -> Iterator[Path]:
        for root in self.roots:
            yield from self._walk_root(root)

    def _walk_root(self, root: Path) -> Iterator[Path]:
        try:
            is_dir = root.is_dir()
            is_file = not is_dir and root.is_file()
        except OSError as exc:
            LOGGER.debug("skipping root %s: %s", root, exc)
            return
        if is_file:
            yield from self._emit(root)
            return
        if not is_dir:
            LOGGER.debug("skipping missing root %s", root)
            return
        stack = _IgnoreStack.build(self.policy, root)
        for dirpath, dirnames, filenames in os.walk(
            root,
            followlinks=self.policy.follow_symlinks,
            onerror=self._on_error,
        ):
            current = Path(dirpath)
            if not self._enter(current):
                dirnames[:] = []
                continue
            stack.push(current, current.parent if current != root else None)
            dirnames[:] = sorted(
                name for name in dirnames if not self._skip(current / name, is_dir=True, stack=stack, parent=current)
            )
            for name in sorted(filenames):
                candidate = current / name
                if self._skip(candidate, is_dir=False, stack=stack, parent=current):
                    continue
                yield from self._emit(candidate)

    def _enter(self, directory: Path) -> bool:
        """Record ``directory`` returning ``False`` when it was already visited."""

        try:
            stat = directory.stat()
        except OSError as exc:
            LOGGER.debug("skipping directory %s: %s", directory, exc)
            return False
        key = (stat.st_dev, stat.st_ino)
        if key in self._seen_dirs:
            LOGGER.debug("skipping already visited directory %s", directory)
            return False
        self._seen_dirs.add(key)
        return True

    def _skip(self, path: Path, *, is_dir: bool, stack: _IgnoreStack, parent: Path) -> bool:
        overrides = self.policy.overrides
        if overrides is not None and overrides.excludes(path, is_dir=is_dir):
            return True
        decision = stack.ignored(path, is_dir=is_dir, directory=parent)
        if decision is True:
            return True
        if not is_dir and not self.policy.file_types.matches(path.name):
            return True
        return decision is None and path.name.startswith(".")

    def _emit(self, candidate: Path) -> Iterator[Path]:
        try:
            regular = candidate.is_file()
        except OSError as exc:
            LOGGER.debug("skipping %s: %s", candidate, exc)
            return
        if not regular:
            return
        absolute = candidate if candidate.is_absolute() else candidate.absolute()
        if absolute in self._seen_files:
            return
        self._seen_files.add(absolute)
        yield absolute

    @staticmethod
    def _on_error(error: OSError) -> None:
        LOGGER.debug("walk error: %s", error)


def walk(roots: WalkRoots, policy: IgnorePolicy) -> Iterator[Path]:
    """Return a fresh lazy iterator over candidate files under ``roots``.

    Args:
        roots: Roots selected by :func:`select_roots`.
        policy: Ignore policy for the run.

    Returns:
        Iterator[Path]: Absolute paths of regular files to lint.
    """

    return iter(Walker(roots=roots, policy=policy))


__all__ = ["WalkRoots", "Walker", "select_roots", "walk"]
