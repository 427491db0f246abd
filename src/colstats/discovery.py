"""
Input discovery: expand file and directory arguments into a flat file list.

Roots are resolved through symlinks; entries below a root are not (a symlinked
directory inside a tree is listed as a file), so link cycles cannot recurse.
"""

import logging
import os
from typing import Iterable, List

from .errors import TraversalError

log = logging.getLogger(__name__)


def _walk_dir(root: str, out: List[str]) -> None:
    try:
        with os.scandir(root) as it:
            entries = list(it)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                _walk_dir(entry.path, out)
            else:
                out.append(entry.path)
    except OSError as exc:
        raise TraversalError(root, exc) from exc


def list_files(paths: Iterable[str]) -> List[str]:
    """
    Return every non-directory entry under `paths`, depth-first.

    A path that is itself a file is returned as given. Entries keep the order
    the filesystem lists them in. Any failure aborts the whole walk.
    """
    roots = [str(p) for p in paths]
    files: List[str] = []
    for root in roots:
        if os.path.isdir(root):
            _walk_dir(root, files)
        elif os.path.exists(root):
            files.append(root)
        else:
            raise TraversalError(root, FileNotFoundError(f"No such file or directory: '{root}'"))
    log.info("Discovered %d file(s) under %d path(s)", len(files), len(roots))
    return files
