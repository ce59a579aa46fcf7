"""
HTTP transport for the RCPCH growth API.

High level
----------
The calculation itself happens remotely; this module only carries a JSON
body to an endpoint and hands the response text back. `Transport` is the
seam the rest of the package talks to, so tests (or another host runtime)
can swap in their own implementation.

Key behaviors
-------------
- Exactly one POST per call: no retries, no backoff, no caching.
- No timeout is set here; the request blocks until `requests` returns.
- HTTP status codes are not inspected. The response body decides success
  (see `projection.parse_calculation`).
- Network-level failures surface as `TransportError`, chained to the
  original `requests` exception.

Environment
-----------
RCPCH_API_BASE_URL : Optional base URL override (default "https://api.rcpch.ac.uk/growth/v1")
"""

from __future__ import annotations

import abc
import logging
import os
from typing import Dict, Optional

import requests

from .errors import TransportError

# ------------------------------------------------------------------------------
# Module configuration
# ------------------------------------------------------------------------------

API_BASE_URL = os.getenv(
    "RCPCH_API_BASE_URL", "https://api.rcpch.ac.uk/growth/v1"
).rstrip("/")

SUBSCRIPTION_KEY_HEADER = "Subscription-Key"


def build_headers(primary_api_key: Optional[str] = None) -> Dict[str, str]:
    """
    Request headers for a calculation POST.

    The subscription key header is only added when a key is supplied.
    """
    headers = {"Content-Type": "application/json"}
    if primary_api_key is not None:
        headers[SUBSCRIPTION_KEY_HEADER] = primary_api_key
    return headers


class Transport(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def post(self, url: str, body: str, headers: Dict[str, str]) -> str:
        # return the raw response text; raise TransportError on network failure
        raise NotImplementedError


class RequestsTransport(Transport):
    def __init__(self, session: Optional[requests.Session] = None):
        # an injected session belongs to the caller and is left open
        self._session = session

    def post(self, url: str, body: str, headers: Dict[str, str]) -> str:
        """
        POST `body` to `url` once and return the response text.

        Without an injected session, a fresh one is opened for this call and
        closed before returning.

        Raises
        ------
        TransportError
            If `requests` fails to complete the exchange.
        """
        logging.debug(f"POST {url} body={body}")
        try:
            if self._session is not None:
                resp = self._session.post(url, data=body.encode("utf-8"), headers=headers)
            else:
                with requests.Session() as session:
                    resp = session.post(url, data=body.encode("utf-8"), headers=headers)
        except requests.RequestException as e:
            logging.error(f"POST {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e
        logging.debug(f"POST {url} -> HTTP {resp.status_code}")
        return resp.text
