import logging
import os

from bmp_errors import (
    AlreadyOpenError, ExtensionMismatchError, NotFoundOrUnreadableError,
    NotOpenError, ShortReadError
)

logger = logging.getLogger(__name__)


def get_extension(path) -> str:
    # Everything after the last '.', or nothing when there is no '.'
    path = os.fspath(path)
    dot = path.rfind(".")
    if dot < 0:
        return ""
    return path[dot + 1:]


class ByteSource:
    """Binary file loaded whole into memory.

    Holds one OS file handle between ``open()`` and ``close()``. Use it as
    a context manager to get the handle released on every exit path.
    """

    def __init__(self, path, expected_extension="bmp"):
        self.path = path
        self.expected_extension = expected_extension
        self._file = None

    @property
    def is_open(self):
        return self._file is not None

    def open(self):
        if self._file is not None:
            raise AlreadyOpenError(f"{self.path} is already open")

        # Check the name before touching the disk
        extension = get_extension(self.path)
        if extension != self.expected_extension:
            raise ExtensionMismatchError(self.path, self.expected_extension, extension)

        try:
            self._file = open(self.path, "rb")
        except OSError as e:
            raise NotFoundOrUnreadableError(f"cannot open {self.path}: {e}") from e
        logger.debug("opened %s", self.path)
        return self

    def size(self) -> int:
        if self._file is None:
            raise NotOpenError(f"{self.path} is not open")
        self._file.seek(0, os.SEEK_END)
        size = self._file.tell()
        self._file.seek(0)
        logger.debug("%s is %d bytes", self.path, size)
        return size

    def read_all(self) -> bytes:
        expected = self.size()
        data = self._file.read(expected)
        # An empty file counts as a failed read too
        if expected == 0 or len(data) != expected:
            raise ShortReadError(self.path, expected, len(data))
        return data

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.debug("closed %s", self.path)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
