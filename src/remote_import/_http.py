"""HTTP client wrapper around httpx."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import httpx

from remote_import.config import FetchTimeout
from remote_import.errors import NetworkError, RequestTimeoutError, error_from_status_code


class Transport(Protocol):
    """Anything that can turn a URL into stylesheet text."""

    def fetch(self, url: str, headers: Mapping[str, str]) -> str: ...


@dataclass(frozen=True)
class HttpResponse:
    """Response to a GET request."""

    status_code: int
    text: str
    headers: dict[str, str]
    url: str = ""


class HttpClient:
    """Thin wrapper around :mod:`httpx` that maps errors into remote_import exceptions."""

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        timeout: FetchTimeout | None = None,
    ) -> None:
        t = timeout or FetchTimeout()
        self._client = httpx.Client(
            headers=dict(headers or {}),
            follow_redirects=True,
            timeout=httpx.Timeout(
                connect=t.connect,
                read=t.read,
                write=t.read,
                pool=t.connect,
            ),
        )

    def get(
        self, url: str, extra_headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        """Send a GET request and return the response.

        Raises a remote_import error on non-2xx status or transport failure.
        """
        try:
            resp = self._client.get(url, headers=dict(extra_headers or {}))
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(str(exc) or f"Timed out: {url}", url=url, cause=exc) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc) or f"Request failed: {url}", url=url, cause=exc) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            raise NetworkError(f"Invalid URL {url!r}: {exc}", url=url, cause=exc) from exc

        if resp.status_code >= 300:
            raise error_from_status_code(resp.status_code, url)

        return HttpResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=dict(resp.headers),
            url=str(resp.url),
        )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HttpTransport:
    """:class:`Transport` backed by an :class:`HttpClient`."""

    def __init__(self, client: HttpClient | None = None) -> None:
        self._client = client or HttpClient()

    def fetch(self, url: str, headers: Mapping[str, str]) -> str:
        return self._client.get(url, extra_headers=headers).text

    def close(self) -> None:
        self._client.close()
