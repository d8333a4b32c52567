"""
Input sources and the line-reading primitive.

A source is opened only when the relay reaches it and is released before
the next one is opened. Streams handed in by the caller (stdin) are never
closed by the relay.
"""
import abc
import contextlib
import logging
from pathlib import Path
from typing import BinaryIO, ContextManager, Iterator, Union

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Base class for recoverable per-source failures."""

    label = ""

    def __init__(self, name: str, error: OSError):
        self.name = name
        self.error = error
        super().__init__(f"{name}: {self.label}{self.reason}")

    @property
    def reason(self) -> str:
        return self.error.strerror or str(self.error)


class SourceOpenError(SourceError):
    """The source could not be opened (missing file, permission denied, ...)."""


class SourceReadError(SourceError):
    """Reading failed part way through the source."""

    label = "read error: "


class InputSource(abc.ABC):
    """A named, openable producer of bytes."""

    name: str

    @abc.abstractmethod
    def open(self) -> ContextManager[BinaryIO]:
        """Return a context manager yielding a binary handle.

        Raises:
            SourceOpenError: the source cannot be opened
        """

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class FileSource(InputSource):
    """A file on disk, opened in binary mode and closed when done."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.name = str(path)

    def open(self) -> ContextManager[BinaryIO]:
        try:
            return open(self.path, "rb")
        except OSError as e:
            raise SourceOpenError(self.name, e) from e


class StreamSource(InputSource):
    """An already-open binary stream, typically standard input."""

    def __init__(self, stream: BinaryIO, name: str = "<stdin>"):
        self._stream = stream
        self.name = name

    def open(self) -> ContextManager[BinaryIO]:
        return contextlib.nullcontext(self._stream)

    def is_interactive(self) -> bool:
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False


def iter_lines(handle: BinaryIO, name: str = "<stream>") -> Iterator[bytes]:
    """
    Lazily yield lines from ``handle``, terminators included.

    A final line without a trailing newline is still yielded. An empty read
    ends the iteration; any OSError is raised as SourceReadError.
    """
    while True:
        try:
            line = handle.readline()
        except OSError as e:
            raise SourceReadError(name, e) from e
        if not line:
            return
        yield line
