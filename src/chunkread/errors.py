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

"""Base exception hierarchy for :mod:`chunkread`."""

from __future__ import annotations


class ChunkReadError(Exception):
    """Base class for all chunkread exceptions.

    Readers never raise to signal that nothing is left to read: an exhausted
    source answers ``None`` from peek/pop and ``0`` or ``b""`` from the byte
    stream methods. Exceptions deriving from this class indicate a broken
    contract instead.

    Example:
        Catch any chunkread-specific error::

            try:
                data = reader.read(64)
            except ChunkReadError as e:
                logger.error("Reader failure: %s", e)
                raise
    """


class StreamContractError(ChunkReadError, RuntimeError):
    """Raised when the byte-stream adapter copies an unexpected byte count.

    ``readinto`` copies chunk bytes into the caller's buffer slice by slice.
    Each copy is sized from the same lengths that drive the loop, so a size
    mismatch means the adapter itself is broken (for example a chunk source
    that mutated the chunk between ``peek_mut_string`` and ``pop_string``).

    Warning:
        The reader state is undefined after this exception. Discard the
        reader rather than retrying the read.
    """


__all__ = [
    "ChunkReadError",
    "StreamContractError",
]
