"""Shared fixtures for license-hound tests."""

from typing import Any, Callable, Optional

import pytest
from click.testing import CliRunner

from license_hound.resolvers.http import HttpResponse

MIT_TEXT = """MIT License

Copyright (c) 2024 Example Authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

BSD_3_TEXT = """Copyright (c) 2020, The Example Project
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED.
"""

MPL_TEXT = """Mozilla Public License Version 2.0
==================================

1. Definitions
--------------

1.4. "Covered Software"
    means Source Code Form to which the initial Contributor has attached
    the notice in Exhibit A, the Executable Form of such Source Code
    Form, and Modifications of such Source Code Form, in each case
    including portions thereof.

Exhibit A - Source Code Form License Notice
-------------------------------------------

  This Source Code Form is subject to the terms of the Mozilla Public
  License, v. 2.0. If a copy of the MPL was not distributed with this
  file, You can obtain one at http://mozilla.org/MPL/2.0/.
"""

APACHE_TEXT = """
                                 Apache License
                           Version 2.0, January 2004
                        http://www.apache.org/licenses/

   TERMS AND CONDITIONS FOR USE, REPRODUCTION, AND DISTRIBUTION
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def mit_text() -> str:
    """MIT license text."""
    return MIT_TEXT


@pytest.fixture
def bsd_text() -> str:
    """BSD 3-Clause license text."""
    return BSD_3_TEXT


@pytest.fixture
def mpl_text() -> str:
    """MPL 2.0 license text (abridged, keeps the identifying sections)."""
    return MPL_TEXT


@pytest.fixture
def apache_text() -> str:
    """Apache 2.0 license header, not an accepted license."""
    return APACHE_TEXT


class FakeHttpGet:
    """Scripted HttpGet: answers from a URL table and records requests.

    Values in the table are HttpResponse objects or exceptions to raise.
    Unlisted URLs get ``default``, or a 404 when no default is given.
    """

    def __init__(
        self, routes: Optional[dict[str, Any]] = None, default: Any = None
    ) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.default = default
        self.calls: list[str] = []
        self.timeouts: list[float] = []

    async def __call__(self, url: str, *, timeout: float) -> HttpResponse:
        self.calls.append(url)
        self.timeouts.append(timeout)
        answer = self.routes.get(url, self.default)
        if answer is None:
            answer = HttpResponse(status_code=404, url=url)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def fake_http() -> Callable[..., FakeHttpGet]:
    """Factory for scripted HttpGet fakes."""
    return FakeHttpGet
