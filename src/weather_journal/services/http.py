"""
Shared HTTP client with explicit, bounded timeouts.

Provides a pre-configured ``requests.Session`` for the document store and
weather clients.  Calls are single-shot: the mounted adapter never retries,
so one failed attempt is the final outcome for that request.

Usage::

    from weather_journal.services.http import create_session

    s = create_session(timeout=10)
    resp = s.get("https://api.example.com/v1/data")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: No retries, no backoff. Status codes are left to the caller to interpret.
DEFAULT_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = "weather-journal/0.1"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    verify: bool = True,
) -> requests.Session:
    """
    Build a ``requests.Session`` with a no-retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        verify: Verify TLS certificates.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"
    s.verify = verify

    # Wrap send to inject a default timeout so no call can block forever.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
