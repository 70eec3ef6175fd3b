"""Probe whether another process holds a file locked.

The answer is only a snapshot: a file reported as unlocked may be locked by the
time the caller opens it.
"""

import errno
import os
import sys

from safewalk.types import PathType

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

# errno values a non-blocking lock request fails with while another holder has the file
_LOCK_CONTENTION = {errno.EACCES, errno.EAGAIN, errno.EWOULDBLOCK, getattr(errno, "EDEADLOCK", errno.EDEADLK)}

# Windows error codes for an open refused because of another process's share mode or lock
_ERROR_SHARING_VIOLATION = 32
_ERROR_LOCK_VIOLATION = 33


def _is_sharing_violation(error: OSError) -> bool:
    return getattr(error, "winerror", None) in (_ERROR_SHARING_VIOLATION, _ERROR_LOCK_VIOLATION)


def _try_lock(fd: int) -> bool:
    """Try to take an exclusive lock without blocking, releasing it at once. Returns False on contention."""
    try:
        if sys.platform == "win32":
            msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)
        else:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError as e:
        if _is_sharing_violation(e) or e.errno in _LOCK_CONTENTION:
            return False
        raise
    if sys.platform == "win32":
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(fd, fcntl.LOCK_UN)
    return True


def is_locked(path: PathType) -> bool:
    """Check whether a file is held locked by someone else.

    The file is opened read-only and an exclusive, non-blocking lock is requested on
    it. Only a sharing violation counts as locked; a missing file, a permission
    error or any other failure reports False. The descriptor is closed on every
    path out of this function.

    Args:
        path: The file to probe.

    Returns:
        True if another holder's lock or share mode prevents exclusive access.

    Example:
        >>> import tempfile
        >>> with tempfile.NamedTemporaryFile() as f:
        ...     is_locked(f.name)
        False
        >>> is_locked("/no/such/file")
        False
    """
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as e:
        return _is_sharing_violation(e)
    try:
        return not _try_lock(fd)
    except OSError:
        return False
    finally:
        os.close(fd)
