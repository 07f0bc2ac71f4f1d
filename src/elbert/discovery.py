"""Application discovery: enumerate ``.app`` bundles below known directories."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

from elbert.models import AppCandidate

log = structlog.get_logger()

BUNDLE_SUFFIX = ".app"


def discover_applications(directories: Iterable[str]) -> list[AppCandidate]:
    """Walk each directory and return every application bundle found.

    Hidden entries are skipped and bundles are not descended into. Missing
    directories are ignored. The result may contain duplicate names; the
    index collapses them on rebuild.
    """
    found: list[AppCandidate] = []
    for directory in directories:
        root = Path(directory).expanduser()
        if not root.is_dir():
            log.debug("application_dir_missing", path=str(root))
            continue

        for dirpath, dirnames, _filenames in os.walk(root):
            bundles = [name for name in dirnames if name.lower().endswith(BUNDLE_SUFFIX)]
            for name in sorted(bundles):
                if name.startswith("."):
                    continue
                found.append(
                    AppCandidate(
                        display_name=name[: -len(BUNDLE_SUFFIX)],
                        locator=os.path.join(dirpath, name),
                    )
                )
            # Prune in place: no hidden dirs, no bundle contents
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith(".") and name not in bundles
            )

    log.info("applications_discovered", count=len(found))
    return found
