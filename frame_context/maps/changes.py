# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Change Detection — Which files of a source changed since the last commit.

The incremental map build only needs ``ChangeDetector.changed_paths()``.
GitChangeDetector is the default; tests and non-git setups can plug in
anything with the same method.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Protocol

logger = logging.getLogger("frame.changes")


@dataclass(frozen=True)
class ChangeSet:
    """Changed paths relative to a source root, or "everything changed"."""
    paths: FrozenSet[str] = field(default_factory=frozenset)
    everything: bool = False

    def __contains__(self, rel_path: str) -> bool:
        return self.everything or rel_path in self.paths


ALL_CHANGED = ChangeSet(everything=True)


class ChangeDetector(Protocol):
    def changed_paths(self, source_root: Path) -> ChangeSet:
        ...


class GitChangeDetector:
    """
    Uncommitted, staged and untracked files of a git working tree.

    Paths are read NUL-separated (``-z``) so git prints them verbatim
    instead of C-quoting non-ASCII names.

    A source root that is not itself a git checkout, or a machine without
    git, reports everything as changed.
    """

    COMMANDS: List[List[str]] = [
        ["diff", "--name-only", "-z"],
        ["diff", "--name-only", "--cached", "-z"],
        ["ls-files", "--others", "--exclude-standard", "-z"],
    ]

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    def changed_paths(self, source_root: Path) -> ChangeSet:
        if not (source_root / ".git").exists():
            return ALL_CHANGED

        changed: set[str] = set()
        for args in self.COMMANDS:
            try:
                proc = subprocess.run(
                    ["git", "-C", str(source_root), *args],
                    capture_output=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                    timeout=self._timeout,
                )
            except (FileNotFoundError, subprocess.TimeoutExpired) as e:
                logger.warning("git unavailable for %s (%s); treating all as changed", source_root, e)
                return ALL_CHANGED
            if proc.returncode != 0:
                logger.warning(
                    "git %s failed in %s: %s", " ".join(args), source_root, proc.stderr.strip(),
                )
                continue
            changed.update(name for name in proc.stdout.split("\0") if name)

        logger.debug("%d changed paths in %s", len(changed), source_root)
        return ChangeSet(paths=frozenset(changed))
