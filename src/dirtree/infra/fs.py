from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the filesystem primitives the scanner depends on (directory entry
enumeration and directory status lookup), cross-platform path normalization,
and resolution of the persistent user data directory.
"""

import os
import stat
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "dirtree"
UNIX_APP_DIR_NAME = ".dirtree"

# -----------------------------------------------------------------------------
# FILESYSTEM COLLABORATOR
# -----------------------------------------------------------------------------

class LocalFileSystem:
    """
    Directory access backed by the operating system.

    Both primitives raise OSError on failure; the scanner decides how each
    failure is absorbed.
    """

    @contextmanager
    def scan_names(self, path: str) -> Iterator[Iterator[str]]:
        """
        Open 'path' and yield an iterator over its entry names in read order.

        The directory handle is closed when the context exits, including
        when the consumer raises.
        """
        with os.scandir(path) as entries:
            yield (entry.name for entry in entries)

    def is_directory(self, path: str) -> bool:
        """Return True if 'path' resolves to a directory."""
        return stat.S_ISDIR(os.stat(path).st_mode)


# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/dirtree
    - Linux/Mac: ~/.dirtree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Trailing separators are dropped so child paths compose
    without doubled separators. Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
