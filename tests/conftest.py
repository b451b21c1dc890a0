"""Shared fixtures: an in-memory web of stylesheets served through httpx.MockTransport."""

from __future__ import annotations

import threading
from collections import Counter

import httpx
import pytest

from remote_import._http import HttpClient, HttpTransport

TANGERINE_URL = "http://fonts.googleapis.com/css?family=Tangerine"

TANGERINE_TTF = """@font-face {
  font-family: 'Tangerine';
  font-style: normal;
  font-weight: 400;
  src: local('Tangerine Regular'), local('Tangerine-Regular'), url(http://fonts.gstatic.com/s/tangerine/v9/HGfsyCL5WASpHOFnouG-RKCWcynf_cDxXwCLxiixG1c.ttf) format('truetype');
}
"""

TANGERINE_WOFF2 = """@font-face {
  font-family: 'Tangerine';
  font-style: normal;
  font-weight: 400;
  src: local('Tangerine Regular'), local('Tangerine-Regular'), url(http://fonts.gstatic.com/s/tangerine/v9/HGfsyCL5WASpHOFnouG-RKCWcynf_cDxXwCLxiixG1c.woff2) format('woff2');
}
"""

LOCAL = "http://localhost:1234"

PAGES: dict[str, str] = {
    # fixture-1: style -> a -> a1
    f"{LOCAL}/fixture-1/style.css": '@import url("a/a.css");\n.style { content: ".style"; }\n',
    f"{LOCAL}/fixture-1/a/a.css": '@import url("a1/a1.css");\n.a { content: ".a"; }\n',
    f"{LOCAL}/fixture-1/a/a1/a1.css": '.a1 { content: ".a1"; }\n',
    # fixture-2: style -> (a -> a1), (b -> b1)
    f"{LOCAL}/fixture-2/style.css": (
        '@import url("a/a.css");\n@import url("b/b.css");\n.style { content: ".style"; }\n'
    ),
    f"{LOCAL}/fixture-2/a/a.css": '@import url("a1/a1.css");\n.a { content: ".a"; }\n',
    f"{LOCAL}/fixture-2/a/a1/a1.css": '.a1 { content: ".a1"; }\n',
    f"{LOCAL}/fixture-2/b/b.css": '@import url("b1/b1.css");\n.b { content: ".b"; }\n',
    f"{LOCAL}/fixture-2/b/b1/b1.css": '.b1 { content: ".b1"; }\n',
    # fixture-3: relative asset references at two levels
    f"{LOCAL}/fixture-3/style.css": """@import url("recursive/style.css");
@font-face {
  font-family: "Test";
  src: url("./font.woff");
}
.absolute { background-image: url("http://example.com/absolute.png"); }
.root-relative { background-image: url("/root-relative.png"); }
.implicit-sibling { background-image: url("implicit-sibling.png"); }
.sibling { background-image: url("./sibling.png"); }
.parent { background-image: url("../parent.png"); }
.grandparent { background-image: url("../../grandparent.png"); }
""",
    f"{LOCAL}/fixture-3/recursive/style.css": """.sibling-recursive { background-image: url("./sibling-recursive.png"); }
.parent-recursive { background-image: url("../parent-recursive.png"); }
.grandparent-recursive { background-image: url("../../grandparent-recursive.png"); }
""",
    # cycle: a -> b -> a
    f"{LOCAL}/cycle/a.css": '@import url("b.css");\n.a { color: red; }\n',
    f"{LOCAL}/cycle/b.css": '@import url("a.css");\n.b { color: blue; }\n',
    # broken content
    f"{LOCAL}/broken.css": ".oops { color: red;\n",
    # charset is dropped when spliced
    f"{LOCAL}/charset.css": '@charset "utf-8";\n.c { color: green; }\n',
}


class FakeWeb:
    """Serves PAGES (plus per-test additions) and records every request."""

    def __init__(self) -> None:
        self.pages: dict[str, str] = dict(PAGES)
        self.status: dict[str, int] = {}
        self.calls: Counter[str] = Counter()
        self.headers: list[httpx.Headers] = []
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        with self._lock:
            self.calls[url] += 1
            self.headers.append(request.headers)
        if url == TANGERINE_URL:
            agent = request.headers.get("user-agent", "")
            body = TANGERINE_WOFF2 if "Chrome" in agent else TANGERINE_TTF
            return httpx.Response(200, text=body, headers={"content-type": "text/css"})
        if url in self.status:
            return httpx.Response(self.status[url], text="error")
        if url not in self.pages:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=self.pages[url], headers={"content-type": "text/css"})

    def client(self) -> HttpClient:
        client = HttpClient()
        client._client = httpx.Client(transport=httpx.MockTransport(self.handler))
        return client

    def transport(self) -> HttpTransport:
        return HttpTransport(self.client())


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()
