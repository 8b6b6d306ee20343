# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Binary file object over a StringReader.

ChunkStream lets any consumer of ``io.BufferedIOBase`` read queued text
chunks as bytes::

    reader = StringReader.from_chunks(["caf", "é\\n", "ok\\n"])
    with io.TextIOWrapper(reader.as_stream(), encoding="utf-8") as text:
        text.readlines()   # ['café\\n', 'ok\\n']
"""

from __future__ import annotations

import io
from collections.abc import Buffer
from typing import TYPE_CHECKING, override

from .logging import StructuredLogger, get_logger

if TYPE_CHECKING:
    from ._string_reader import StringReader

__all__ = ["ChunkStream"]

logger: StructuredLogger = get_logger(__name__, context={"component": "chunk_stream"})


class ChunkStream(io.BufferedIOBase):
    """Read-only, non-seekable buffered stream backed by a StringReader.

    ``read1``/``readinto1``/``peek`` work on one chunk at a time, which is
    what ``io.TextIOWrapper`` and ``IOBase.readline`` use. Closing the
    stream leaves the reader and its remaining chunks untouched.
    """

    def __init__(self, reader: StringReader) -> None:
        """Initialize the stream.

        Args:
            reader: The reader whose chunks are exposed as bytes.
        """
        super().__init__()
        self._reader = reader

    @property
    def reader(self) -> StringReader:
        """The wrapped reader."""
        return self._reader

    def _check_open(self) -> None:
        if self.closed:
            msg = "I/O operation on closed file."
            raise ValueError(msg)

    def _skip_empty_chunks(self) -> bytes:
        # An empty chunk would read as EOF to callers of read1/peek.
        while not (data := self._reader.fill_buf()) and not self._reader.is_empty():
            _ = self._reader.pop_string()
        return data

    @override
    def readable(self) -> bool:
        """Return True - chunk streams are always readable while open."""
        self._check_open()
        return True

    @override
    def read(self, size: int | None = -1, /) -> bytes:
        """Read up to ``size`` bytes across as many chunks as needed.

        Args:
            size: Maximum byte count. ``None`` or negative reads to the end.

        Returns:
            The bytes read; ``b""`` at end of data.
        """
        self._check_open()
        return self._reader.read(size)

    @override
    def read1(self, size: int = -1, /) -> bytes:
        """Read up to ``size`` bytes from the next non-empty chunk only."""
        self._check_open()
        if size == 0:
            return b""
        data = self._skip_empty_chunks()
        if size > 0:
            data = data[:size]
        self._reader.consume(len(data))
        return data

    @override
    def readinto(self, buffer: Buffer, /) -> int:
        """Fill ``buffer`` from as many chunks as needed.

        Args:
            buffer: Writable buffer to read into.

        Returns:
            Number of bytes written (0 at end of data).
        """
        self._check_open()
        return self._reader.readinto(buffer)

    @override
    def readinto1(self, buffer: Buffer, /) -> int:
        """Fill ``buffer`` from the next non-empty chunk only.

        Args:
            buffer: Writable buffer to read into.

        Returns:
            Number of bytes written (0 at end of data).
        """
        self._check_open()
        view = memoryview(buffer).cast("B")
        data = self.read1(len(view))
        view[: len(data)] = data
        return len(data)

    def peek(self, size: int = 0, /) -> bytes:
        """Return the bytes of the next non-empty chunk without consuming them.

        ``size`` is accepted for ``io.BufferedReader`` compatibility; the
        whole chunk is returned regardless.
        """
        self._check_open()
        return self._skip_empty_chunks()

    def consume(self, amt: int) -> None:
        """Advance the stream by ``amt`` bytes.

        Raises:
            ValueError: ``amt`` is negative or the stream is closed.
        """
        self._check_open()
        self._reader.consume(amt)

    @override
    def close(self) -> None:
        """Close the stream. The reader and its chunks are left untouched."""
        if not self.closed:
            logger.debug(
                "Closing chunk stream.",
                event="chunk_stream.close",
                context={"drained": self._reader.is_empty()},
            )
        super().close()
