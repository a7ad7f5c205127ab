"""
Filesystem primitives for drand keystore

Folders holding key material are owner-only (0700). Private files are created
owner read/write only (0600) at open time, so there is no moment where the
file exists with wider permissions.
"""

import os
import stat
import logging
import platform
from pathlib import Path
from typing import IO, Optional, Union

logger = logging.getLogger(__name__)

FOLDER_PERMISSIONS = 0o700  # Owner only
SECURE_FILE_PERMISSIONS = 0o600  # Owner read/write only

PathLike = Union[str, Path]


def _is_windows() -> bool:
    return platform.system() == "Windows"


def create_secure_folder(folder: PathLike) -> Optional[str]:
    """
    Create a folder with owner-only permissions, or harden an existing one.

    Args:
        folder: Folder to create

    Returns:
        The folder path as a string, or None if it could not be created or
        secured.
    """
    path = Path(folder)
    try:
        path.mkdir(mode=FOLDER_PERMISSIONS, parents=True, exist_ok=True)
        if not path.is_dir():
            logger.error("fs: %s exists and is not a folder", path)
            return None
        if not _is_windows():
            os.chmod(path, FOLDER_PERMISSIONS)
    except OSError as e:
        logger.error("fs: can't create secure folder %s: %s", path, e)
        return None
    return str(path)


def create_secure_file(file_path: PathLike) -> IO[str]:
    """
    Open a file for writing that only its owner can read.

    The file is created with 0600 through os.open, and a pre-existing file is
    narrowed to 0600 before it is truncated or written to. A symlink at
    file_path is refused rather than followed.

    Args:
        file_path: File to create or overwrite

    Returns:
        A text file object open for writing

    Raises:
        OSError: If the file cannot be created
    """
    flags = os.O_WRONLY | os.O_CREAT | getattr(os, "O_NOFOLLOW", 0)
    fd = os.open(str(file_path), flags, SECURE_FILE_PERMISSIONS)
    try:
        if not _is_windows():
            os.fchmod(fd, SECURE_FILE_PERMISSIONS)
        os.ftruncate(fd, 0)
        return os.fdopen(fd, "w", encoding="utf-8")
    except BaseException:
        os.close(fd)
        raise


def create_file(file_path: PathLike) -> IO[str]:
    """Open a file for writing with the process' default permissions"""
    return open(file_path, "w", encoding="utf-8")


def file_exists(file_path: PathLike) -> bool:
    """Return True if a regular file exists at file_path"""
    try:
        return stat.S_ISREG(os.stat(file_path).st_mode)
    except OSError:
        return False


def permissions(file_path: PathLike) -> int:
    """Return the permission bits of file_path"""
    return stat.S_IMODE(os.stat(file_path).st_mode)
