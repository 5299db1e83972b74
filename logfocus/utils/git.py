"""Git repository utilities for logfocus.

Used by configuration discovery to find a repository-level logfocus.toml.
"""

import os
from pathlib import Path
from typing import Optional

GIT_ROOT_ENV = "LOGFOCUS_GIT_ROOT"


def find_git_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the root directory of a git repository.

    Walks up from the start path (or current working directory) looking for
    a ``.git`` entry; a ``.git`` file (worktrees, submodules) counts too.
    The LOGFOCUS_GIT_ROOT environment variable overrides detection and is
    returned as-is, whether or not it exists.

    Args:
        start_path: Directory to start searching from. If None, uses the
            current working directory.

    Returns:
        Path to the git root directory, or None if not in a git repository.
    """
    override = os.environ.get(GIT_ROOT_ENV)
    if override:
        return Path(override)

    start = Path.cwd() if start_path is None else Path(start_path).resolve()
    for directory in (start, *start.parents):
        if (directory / ".git").exists():
            return directory
    return None
