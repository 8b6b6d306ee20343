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

"""Reader over borrowed ``str`` chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import override

from ._protocols import BorrowedChunkSource, StrWrite
from ._queue import ChunkQueue
from .dbc import invariant

__all__ = ["StrReader"]


def _queue_holds_strs(reader: StrReader) -> bool:
    return all(isinstance(chunk, str) for chunk in reader.queue)


def _fallback_is_borrowed_source(reader: StrReader) -> bool:
    return reader.reader is None or isinstance(reader.reader, BorrowedChunkSource)


@invariant(_queue_holds_strs, _fallback_is_borrowed_source)
@dataclass(slots=True)
class StrReader(
    ChunkQueue[str, BorrowedChunkSource], BorrowedChunkSource, StrWrite
):
    """Queue of ``str`` chunks in front of an optional BorrowedChunkSource.

    Chunks are handed out as the very objects that were queued. There is no
    byte-stream adapter here: use :class:`StringReader` when chunks must be
    consumed partially.

    Example::

        reader = StrReader()
        reader.shift_str("hai")
        reader.shift_str("bai")
        reader.pop_str()   # 'bai'
        reader.pop_str()   # 'hai'
        reader.pop_str()   # None
    """

    @classmethod
    @override
    def _coerce_chunk(cls, chunk: object) -> str:
        if not isinstance(chunk, str):
            msg = f"StrReader chunks must be str, got {type(chunk).__name__}."
            raise TypeError(msg)
        return chunk

    @override
    def _chunk_text(self, chunk: str) -> str:
        return chunk

    @override
    def _pop_chunk(self) -> str | None:
        return self.pop_str()

    @override
    def pop_str(self) -> str | None:
        if self.queue:
            return self.queue.popleft()
        if self.reader is None:
            return None
        self._log_fallback()
        return self.reader.pop_str()

    def push_str(self, chunk: str) -> None:
        """Insert ``chunk`` as the *last* item to be popped."""
        self._push_back(chunk)

    def shift_str(self, chunk: str) -> None:
        """Insert ``chunk`` as the *next* item to be popped."""
        self._push_front(chunk)
