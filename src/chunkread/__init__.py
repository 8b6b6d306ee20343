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

"""Readers for text chunks instead of bytes.

Two reader variants share one queue-before-fallback design:

- :class:`StringReader` queues owned :class:`StringBuffer` chunks in front of
  an optional :class:`OwnedChunkSource`, and can be read as a byte stream
  (``readinto``, ``read``, ``fill_buf``/``consume``, :meth:`as_stream`).
- :class:`StrReader` queues plain ``str`` chunks in front of an optional
  :class:`BorrowedChunkSource`. It has no byte-stream adapter.

Example usage::

    from chunkread import StringBuffer, StringReader

    reader = StringReader.from_source(StringBuffer(" world"))
    reader.push_string("hello")
    reader.read(8)       # b'hello wo'
    reader.peek_str()    # 'rld'
"""

from __future__ import annotations

from ._chunks import StringBuffer, StrSlice
from ._protocols import (
    BorrowedChunkSource,
    ChunkSource,
    OwnedChunkSource,
    StringWrite,
    StrWrite,
)
from ._queue import ChunkQueue
from ._str_reader import StrReader
from ._stream import ChunkStream
from ._string_reader import StringReader
from .errors import ChunkReadError, StreamContractError

__all__ = [
    "BorrowedChunkSource",
    "ChunkQueue",
    "ChunkReadError",
    "ChunkSource",
    "ChunkStream",
    "OwnedChunkSource",
    "StrReader",
    "StrSlice",
    "StrWrite",
    "StreamContractError",
    "StringBuffer",
    "StringReader",
    "StringWrite",
]
