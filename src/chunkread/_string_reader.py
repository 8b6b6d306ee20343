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

"""Reader over owned chunks with a byte-stream adapter.

StringReader is the owned-chunk instantiation of :class:`ChunkQueue`. On top
of peek/pop it implements ``readinto``/``read`` and the ``fill_buf``/
``consume`` pair, so its chunks can be consumed as one continuous byte
stream. :meth:`StringReader.as_stream` wraps it in an ``io.BufferedIOBase``
for consumers that expect a real file object.
"""

from __future__ import annotations

from collections.abc import Buffer
from dataclasses import dataclass
from typing import override

from ._chunks import StringBuffer
from ._protocols import OwnedChunkSource, StringWrite
from ._queue import ChunkQueue
from ._stream import ChunkStream
from .dbc import ensure, invariant
from .errors import StreamContractError
from .logging import StructuredLogger, get_logger

__all__ = ["StringReader"]

logger: StructuredLogger = get_logger(__name__, context={"component": "chunk_reader"})


def _queue_holds_string_buffers(reader: StringReader) -> bool:
    return all(isinstance(chunk, StringBuffer) for chunk in reader.queue)


def _fallback_is_owned_source(reader: StringReader) -> bool:
    return reader.reader is None or isinstance(reader.reader, OwnedChunkSource)


def _count_fits_buffer(self: StringReader, buffer: Buffer, result: int) -> bool:
    return 0 <= result <= memoryview(buffer).nbytes


def _copy_into(view: memoryview, pos: int, data: bytes) -> None:
    end = pos + len(data)
    if end > len(view):
        msg = (
            f"Chunk of {len(data)} bytes does not fit at offset {pos}"
            f" of a {len(view)} byte buffer."
        )
        raise StreamContractError(msg)
    view[pos:end] = data


@invariant(_queue_holds_string_buffers, _fallback_is_owned_source)
@dataclass(slots=True)
class StringReader(
    ChunkQueue[StringBuffer, OwnedChunkSource], OwnedChunkSource, StringWrite
):
    """An ``io.BufferedReader`` counterpart for text chunks instead of bytes.

    Chunks queued with :meth:`push_string` or :meth:`shift_string` are read
    first; the optional fallback ``reader`` supplies chunks once the queue is
    empty::

        reader = StringReader.from_source(StringBuffer("tail"))
        reader.push_string("head ")
        reader.read()   # b'head tail'

    Byte reads split chunks wherever the caller's buffer ends. The unread
    suffix stays at the front as a shortened chunk.
    """

    @classmethod
    @override
    def _coerce_chunk(cls, chunk: object) -> StringBuffer:
        if isinstance(chunk, StringBuffer):
            return chunk
        if isinstance(chunk, str):
            return StringBuffer(chunk)
        msg = (
            "StringReader chunks must be str or StringBuffer,"
            f" got {type(chunk).__name__}."
        )
        raise TypeError(msg)

    @override
    def _chunk_text(self, chunk: StringBuffer) -> str:
        return chunk.text

    @override
    def _pop_chunk(self) -> StringBuffer | None:
        return self.pop_string()

    @override
    def pop_string(self) -> StringBuffer | None:
        if self.queue:
            return self.queue.popleft()
        if self.reader is None:
            return None
        self._log_fallback()
        return self.reader.pop_string()

    @override
    def peek_mut_string(self) -> StringBuffer | None:
        if self.queue:
            return self.queue[0]
        if self.reader is None:
            return None
        return self.reader.peek_mut_string()

    def push_string(self, chunk: str | StringBuffer) -> None:
        """Insert ``chunk`` as the *last* item to be popped.

        A ``str`` is copied into a new :class:`StringBuffer`; a buffer is
        queued as-is and now belongs to the reader.
        """
        self._push_back(chunk)

    def shift_string(self, chunk: str | StringBuffer) -> None:
        """Insert ``chunk`` as the *next* item to be popped."""
        self._push_front(chunk)

    @ensure(_count_fits_buffer)
    def readinto(self, buffer: Buffer, /) -> int:
        """Fill ``buffer`` with bytes from the next chunks.

        Whole chunks are popped while they fit. The first chunk that does
        not fit is split: its head fills the rest of ``buffer`` and its tail
        stays queued.

        Returns:
            The number of bytes written. ``0`` for a non-empty buffer means
            the reader is exhausted.

        Raises:
            StreamContractError: A chunk changed size between peek and pop.
        """
        view = memoryview(buffer).cast("B")
        remaining = len(view)
        pos = 0
        while (chunk := self.peek_mut_string()) is not None:
            size = len(chunk)
            if size > remaining:
                _copy_into(view, pos, chunk.take_prefix(remaining))
                logger.debug(
                    "Split chunk to fill read buffer.",
                    event="chunk_reader.split",
                    context={"consumed": remaining, "left": len(chunk)},
                )
                return len(view)
            popped = self.pop_string()
            if popped is None or len(popped) != size:
                msg = "Chunk popped by readinto differs from the chunk it peeked."
                raise StreamContractError(msg)
            _copy_into(view, pos, popped.as_bytes())
            pos += size
            remaining -= size
        return pos

    def read(self, size: int | None = -1) -> bytes:
        """Read up to ``size`` bytes; ``None`` or a negative size drains the reader."""
        if size is None or size < 0:
            return b"".join(chunk.as_bytes() for chunk in self.drain())
        buffer = bytearray(size)
        count = self.readinto(buffer)
        return bytes(buffer[:count])

    def fill_buf(self) -> bytes:
        """Return the bytes of the next chunk without consuming anything.

        Returns ``b""`` when the reader is exhausted. The returned bytes are
        a copy; they do not track later reads.
        """
        chunk = self.peek_mut_string()
        return b"" if chunk is None else chunk.as_bytes()

    def consume(self, amt: int) -> None:
        """Discard the next ``amt`` bytes, or everything if fewer remain.

        Raises:
            ValueError: ``amt`` is negative.
        """
        if amt < 0:
            msg = f"consume amount must be non-negative, got {amt}."
            raise ValueError(msg)
        _ = self.readinto(bytearray(amt))

    def as_stream(self) -> ChunkStream:
        """Wrap this reader in a binary file object."""
        return ChunkStream(self)
