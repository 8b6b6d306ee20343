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

"""Capability protocols for chunk sources.

Defines the ChunkSource base protocol and its two ownership flavours:
OwnedChunkSource pops mutable :class:`StringBuffer` chunks and
BorrowedChunkSource pops immutable ``str`` chunks. StringWrite and StrWrite
describe the insertion side of the queue readers.

Sources that explicitly subclass these protocols inherit the default
``is_empty`` and ``map_string`` implementations; structural implementers
must provide them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ._chunks import StringBuffer

__all__ = [
    "BorrowedChunkSource",
    "ChunkSource",
    "OwnedChunkSource",
    "StrWrite",
    "StringWrite",
]


@runtime_checkable
class ChunkSource(Protocol):
    """Anything that can show the next chunk of text without consuming it."""

    def peek_str(self) -> str | None:
        """Return the text of the next chunk.

        Returns:
            The next chunk's text, or ``None`` when nothing is left.

        Raises:
            UnicodeDecodeError: A byte read split the next owned chunk inside
                a multi-byte character. The chunk stays readable as bytes
                through ``fill_buf``/``read`` until the split is consumed.
        """
        ...

    def is_empty(self) -> bool:
        """Return ``True`` when there is nothing left to pop."""
        return self.peek_str() is None


@runtime_checkable
class OwnedChunkSource(ChunkSource, Protocol):
    """A chunk source that hands out owned, mutable buffers.

    Example::

        buffer = StringBuffer("hello")
        buffer.pop_string()   # StringBuffer('hello')
        buffer.pop_string()   # None
    """

    def pop_string(self) -> StringBuffer | None:
        """Remove the next chunk and return it, or ``None`` when empty."""
        ...

    def peek_mut_string(self) -> StringBuffer | None:
        """Return the next chunk in place so it can be edited before popping.

        The handle is only valid until the next pop or read on the source.
        """
        ...

    def map_string(self, f: Callable[[StringBuffer], object]) -> None:
        """Apply ``f`` to the next chunk in place. No-op when empty."""
        chunk = self.peek_mut_string()
        if chunk is not None:
            _ = f(chunk)


@runtime_checkable
class BorrowedChunkSource(ChunkSource, Protocol):
    """A chunk source that hands out immutable ``str`` chunks."""

    def pop_str(self) -> str | None:
        """Remove the next chunk and return it, or ``None`` when empty."""
        ...


@runtime_checkable
class StringWrite(Protocol):
    """Insertion operations for readers of owned chunks."""

    def push_string(self, chunk: str | StringBuffer) -> None:
        """Insert ``chunk`` as the *last* item to be popped."""
        ...

    def shift_string(self, chunk: str | StringBuffer) -> None:
        """Insert ``chunk`` as the *next* item to be popped."""
        ...


@runtime_checkable
class StrWrite(Protocol):
    """Insertion operations for readers of borrowed chunks."""

    def push_str(self, chunk: str) -> None:
        """Insert ``chunk`` as the *last* item to be popped."""
        ...

    def shift_str(self, chunk: str) -> None:
        """Insert ``chunk`` as the *next* item to be popped."""
        ...
