"""Signal-aware output of file listings."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from safewalk.cli.signal_handler import signal_handler

LOCKED_MARKER = " [locked]"


class ListingWriter:
    """Writes one listing entry per line to a file descriptor or a file.

    Writes go straight to the descriptor with ``os.write`` so nothing is left in a
    buffer when the reader goes away. Once SIGPIPE or SIGINT has been received, or
    the descriptor reports a closed pipe, every further write raises
    ``BrokenPipeError`` and the caller is expected to stop.

    Attributes:
        target: The file descriptor or path given at construction.
        fd: The file descriptor being written to.
        count: Number of entries written so far.

    Example:
        >>> import tempfile, pathlib
        >>> out = pathlib.Path(tempfile.mkdtemp()) / "listing.txt"
        >>> with ListingWriter(out) as writer:
        ...     writer.write_entry("/srv/a.txt")
        ...     writer.write_entry("/srv/b.txt", locked=True)
        >>> writer.count
        2
        >>> out.read_text().splitlines()
        ['/srv/a.txt', '/srv/b.txt [locked]']
    """

    def __init__(self, target: Union[int, str, Path]):
        """Open the destination.

        Args:
            target: A file descriptor, or a path to create or truncate.

        Raises:
            TypeError: If target is neither an int nor path-like.
            OSError: If the path cannot be opened for writing.
        """
        self.target = target
        self.count = 0
        self._closed = False

        if isinstance(target, int):
            self.fd = target
            self._file_obj = None
        elif isinstance(target, (str, os.PathLike)):
            self._file_obj = Path(target).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    def write_entry(self, path: str, locked: bool = False) -> None:
        """Write a file path as one line, marked if it is locked, and count it."""
        self.write(path + (LOCKED_MARKER if locked else "") + "\n")
        self.count += 1

    def write(self, text: str) -> None:
        """Write raw text.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed ListingWriter")
        if signal_handler.interrupted():
            raise BrokenPipeError()

        # Undecodable filename bytes come back from os.scandir as surrogates; emit them unchanged
        data = text.encode("utf-8", errors="surrogateescape")
        try:
            while data:
                written = os.write(self.fd, data)
                data = data[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the file if this writer opened it. A broken pipe on close is ignored."""
        if self._closed:
            return
        self._closed = True
        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

    def __enter__(self) -> "ListingWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An error from the with block takes priority over one from closing
            if exc_type is None:
                raise
