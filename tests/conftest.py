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

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from chunkread.dbc import dbc_enabled


@pytest.fixture(autouse=True)
def contracts_enabled() -> Iterator[None]:
    """Run every test with design-by-contract checks switched on."""
    with dbc_enabled():
        yield


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture DEBUG records from the chunkread logger hierarchy."""
    caplog.set_level(logging.DEBUG, logger="chunkread")
    return caplog
