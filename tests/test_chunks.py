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

"""Tests for the single-chunk sources StringBuffer and StrSlice."""

from __future__ import annotations

import copy

import pytest

from chunkread import (
    BorrowedChunkSource,
    ChunkSource,
    OwnedChunkSource,
    StringBuffer,
    StrSlice,
)


class TestStringBuffer:
    """Tests for the owned chunk type."""

    def test_text_and_byte_length(self) -> None:
        """len() counts UTF-8 bytes, text decodes them."""
        buffer = StringBuffer("héllo")
        assert buffer.text == "héllo"
        assert str(buffer) == "héllo"
        assert len(buffer) == 6
        assert bytes(buffer) == "héllo".encode()

    def test_satisfies_owned_protocol(self) -> None:
        """StringBuffer is a ChunkSource and an OwnedChunkSource."""
        buffer = StringBuffer("x")
        assert isinstance(buffer, ChunkSource)
        assert isinstance(buffer, OwnedChunkSource)
        assert not isinstance(buffer, BorrowedChunkSource)

    def test_pop_takes_whole_content_once(self) -> None:
        """The first pop returns everything; later pops return None."""
        buffer = StringBuffer("hello")
        popped = buffer.pop_string()
        assert popped == "hello"
        assert popped is not buffer
        assert buffer.is_empty()
        assert buffer.peek_str() is None
        assert buffer.pop_string() is None
        assert buffer.pop_string() is None

    def test_empty_buffer_is_empty_source(self) -> None:
        """An empty buffer has nothing to peek, pop or mutate."""
        buffer = StringBuffer()
        assert buffer.is_empty()
        assert buffer.peek_str() is None
        assert buffer.peek_mut_string() is None
        assert buffer.pop_string() is None

    def test_peek_mut_returns_self(self) -> None:
        """peek_mut_string exposes the buffer itself for in-place edits."""
        buffer = StringBuffer("ab")
        handle = buffer.peek_mut_string()
        assert handle is buffer
        assert handle is not None
        handle.push_str("c")
        assert buffer.peek_str() == "abc"

    def test_map_string_mutates_in_place(self) -> None:
        """map_string applies the function to the buffer."""
        buffer = StringBuffer("ab")
        buffer.map_string(lambda chunk: chunk.push_str("!"))
        assert buffer == "ab!"

    def test_map_string_on_empty_is_noop(self) -> None:
        """map_string never calls the function when there is no chunk."""
        calls: list[StringBuffer] = []
        StringBuffer().map_string(calls.append)
        assert calls == []

    def test_take_prefix_keeps_suffix(self) -> None:
        """take_prefix returns the head bytes and leaves the tail."""
        buffer = StringBuffer("hello")
        assert buffer.take_prefix(2) == b"he"
        assert buffer == "llo"

    def test_take_prefix_requires_size_within_buffer(self) -> None:
        """Out-of-range prefix sizes are a contract violation."""
        buffer = StringBuffer("ab")
        for size in (-1, 3):
            with pytest.raises(AssertionError, match="require"):
                buffer.take_prefix(size)
        assert buffer == "ab"

    def test_split_inside_character_keeps_bytes(self) -> None:
        """A mid-character split leaves raw bytes that no longer decode."""
        buffer = StringBuffer("é!")
        assert buffer.take_prefix(1) == b"\xc3"
        assert buffer.as_bytes() == b"\xa9!"
        with pytest.raises(UnicodeDecodeError):
            _ = buffer.text
        assert repr(buffer) == "StringBuffer(b'\\xa9!')"

    def test_from_bytes_copies(self) -> None:
        """from_bytes does not alias the source buffer."""
        raw = bytearray(b"abc")
        buffer = StringBuffer.from_bytes(raw)
        raw[0] = ord("z")
        assert buffer == "abc"

    def test_copy_is_independent(self) -> None:
        """copy(), copy.copy and copy.deepcopy all detach the content."""
        buffer = StringBuffer("abc")
        clones = [buffer.copy(), copy.copy(buffer), copy.deepcopy(buffer)]
        buffer.clear()
        assert all(clone == "abc" for clone in clones)

    def test_equality_and_hash(self) -> None:
        """Buffers compare by content against buffers and str."""
        assert StringBuffer("a") == StringBuffer("a")
        assert StringBuffer("a") == "a"
        assert StringBuffer("a") != "b"
        assert StringBuffer("a") != 1
        with pytest.raises(TypeError):
            hash(StringBuffer("a"))

    def test_repr_shows_text(self) -> None:
        assert repr(StringBuffer("hi")) == "StringBuffer('hi')"


class TestStrSlice:
    """Tests for the borrowed single-chunk source."""

    def test_satisfies_borrowed_protocol(self) -> None:
        """StrSlice is a BorrowedChunkSource."""
        source = StrSlice("abc")
        assert isinstance(source, ChunkSource)
        assert isinstance(source, BorrowedChunkSource)
        assert not isinstance(source, OwnedChunkSource)

    def test_pop_is_idempotent(self) -> None:
        """Every pop returns the same full text."""
        text = "hello"
        source = StrSlice(text)
        assert [source.pop_str() for _ in range(3)] == [text, text, text]
        assert source.pop_str() is text

    def test_never_empty(self) -> None:
        """A slice never runs dry, even when its text is empty."""
        source = StrSlice("")
        _ = source.pop_str()
        assert not source.is_empty()
        assert source.peek_str() == ""
