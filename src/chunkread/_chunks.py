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

"""Single-chunk sources.

StringBuffer is the owned chunk type: a mutable UTF-8 buffer that also acts
as a one-shot OwnedChunkSource. StrSlice wraps a plain ``str`` as a
BorrowedChunkSource that never runs dry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import override

from ._protocols import BorrowedChunkSource, OwnedChunkSource
from .dbc import require

__all__ = [
    "StrSlice",
    "StringBuffer",
]


class StringBuffer(OwnedChunkSource):
    """Mutable text chunk stored as UTF-8 bytes.

    Lengths are byte lengths, matching what the byte-stream adapter copies.
    Once a read has split a chunk inside a multi-byte character, ``text`` on
    the remaining suffix raises :class:`UnicodeDecodeError`; the bytes stay
    intact for further stream reads.

    As a source on its own, the buffer yields its whole content once::

        buffer = StringBuffer("abc")
        buffer.pop_string()   # StringBuffer('abc')
        buffer.is_empty()     # True
    """

    __slots__ = ("_data",)

    def __init__(self, text: str = "") -> None:
        self._data = bytearray(text.encode("utf-8"))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> StringBuffer:
        """Create a buffer holding a copy of raw UTF-8 ``data``."""
        buffer = cls()
        buffer._data[:] = data
        return buffer

    @property
    def text(self) -> str:
        """The buffer content decoded as UTF-8.

        Raises:
            UnicodeDecodeError: The buffer starts or ends inside a character.
        """
        return self._data.decode("utf-8")

    def as_bytes(self) -> bytes:
        """Return a copy of the buffer content."""
        return bytes(self._data)

    def push_str(self, text: str) -> None:
        """Append ``text`` to the end of the buffer."""
        self._data += text.encode("utf-8")

    def clear(self) -> None:
        """Drop the buffer content."""
        self._data.clear()

    def take(self) -> StringBuffer:
        """Move the content into a new buffer and leave this one empty."""
        taken = type(self)()
        taken._data, self._data = self._data, taken._data
        return taken

    @require(lambda self, size: 0 <= size <= len(self))
    def take_prefix(self, size: int) -> bytes:
        """Remove the first ``size`` bytes and return them.

        ``size`` must not exceed the buffer length.
        """
        head = bytes(self._data[:size])
        del self._data[:size]
        return head

    def copy(self) -> StringBuffer:
        """Return a new buffer holding a copy of the content."""
        return type(self).from_bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    @override
    def __str__(self) -> str:
        return self.text

    @override
    def __repr__(self) -> str:
        try:
            shown = repr(self.text)
        except UnicodeDecodeError:
            shown = repr(self.as_bytes())
        return f"{type(self).__name__}({shown})"

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, StringBuffer):
            return self._data == other._data
        if isinstance(other, str):
            return self._data == other.encode("utf-8")
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> StringBuffer:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> StringBuffer:
        return self.copy()

    @override
    def peek_str(self) -> str | None:
        return self.text if self._data else None

    @override
    def is_empty(self) -> bool:
        return not self._data

    @override
    def pop_string(self) -> StringBuffer | None:
        return self.take() if self._data else None

    @override
    def peek_mut_string(self) -> StringBuffer | None:
        return self if self._data else None


@dataclass(frozen=True, slots=True)
class StrSlice(BorrowedChunkSource):
    """Borrowed single-chunk source.

    A slice cannot shorten itself, so ``pop_str`` returns the full text on
    every call and the source never reports empty.
    """

    text: str

    @override
    def peek_str(self) -> str | None:
        return self.text

    @override
    def is_empty(self) -> bool:
        return False

    @override
    def pop_str(self) -> str | None:
        return self.text
