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

"""Queue-before-fallback structure shared by both reader variants."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Self

from ._protocols import ChunkSource
from .logging import StructuredLogger, get_logger

__all__ = ["ChunkQueue"]

logger: StructuredLogger = get_logger(__name__, context={"component": "chunk_reader"})


@dataclass(slots=True)
class ChunkQueue[C, R: ChunkSource](ABC):
    """A deque of chunks in front of an optional fallback source.

    ``queue`` is consulted first, in insertion order. ``reader`` is only
    asked for chunks once ``queue`` is empty, and nothing ever refills it.
    Subclasses fix the chunk type ``C`` and the fallback capability ``R``
    and provide the pop operation for their ownership mode.
    """

    queue: deque[C] = field(default_factory=deque)
    reader: R | None = None

    def __post_init__(self) -> None:
        self.queue = deque(self._coerce_chunk(chunk) for chunk in self.queue)

    @classmethod
    def new(cls) -> Self:
        """Return an empty reader with no fallback source."""
        return cls()

    @classmethod
    def from_source(cls, reader: R) -> Self:
        """Return a reader with an empty queue in front of ``reader``."""
        return cls(reader=reader)

    @classmethod
    def from_chunks(cls, chunks: Iterable[object]) -> Self:
        """Return a reader pre-populated with ``chunks`` and no fallback."""
        reader = cls()
        reader.queue.extend(cls._coerce_chunk(chunk) for chunk in chunks)
        return reader

    @classmethod
    @abstractmethod
    def _coerce_chunk(cls, chunk: object) -> C:
        """Validate ``chunk`` and convert it to the queue's chunk type."""

    @abstractmethod
    def _chunk_text(self, chunk: C) -> str: ...

    @abstractmethod
    def _pop_chunk(self) -> C | None: ...

    def peek_str(self) -> str | None:
        """Return the text of the front chunk, else the fallback's next chunk.

        Returns:
            The chunk text, or ``None`` when queue and fallback are empty.
        """
        if self.queue:
            return self._chunk_text(self.queue[0])
        if self.reader is None:
            return None
        return self.reader.peek_str()

    def is_empty(self) -> bool:
        """Return True when neither the queue nor the fallback has a chunk."""
        return not self.queue and (self.reader is None or self.reader.is_empty())

    def _push_back(self, chunk: object) -> None:
        self.queue.append(self._coerce_chunk(chunk))

    def _push_front(self, chunk: object) -> None:
        self.queue.appendleft(self._coerce_chunk(chunk))

    def _log_fallback(self) -> None:
        logger.debug(
            "Chunk queue drained; delegating to fallback source.",
            event="chunk_reader.fallback",
            context={
                "reader": type(self).__name__,
                "source": type(self.reader).__name__,
            },
        )

    def drain(self) -> Iterator[C]:
        """Pop chunks until the reader is empty.

        Popping happens lazily as the iterator advances. Sources that never
        run dry (such as :class:`StrSlice`) make this iterator infinite.
        """
        while (chunk := self._pop_chunk()) is not None:
            yield chunk

    def copy(self) -> Self:
        """Return an independent clone of the queue and the fallback."""
        return copy.deepcopy(self)
