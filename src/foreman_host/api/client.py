# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/api/client.py

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from foreman_host.api.errors import (
    DecodeError,
    HTTPStatusError,
    RequestBuildError,
    TransportError,
)
from foreman_host.config.models import ForemanConfig

log = logging.getLogger("foreman_host")

T = TypeVar("T")

_METHODS = {"GET", "POST", "PUT", "DELETE"}


def _error_message(resp: requests.Response) -> str:
    """
    Foreman reports errors as {"error": {"message": ...}} or
    {"error": {"full_messages": [...]}}. Fall back to the raw body.
    """
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason or ""

    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        if err.get("full_messages"):
            return "; ".join(str(m) for m in err["full_messages"])
        if err.get("message"):
            return str(err["message"])
    return resp.text.strip()


class ForemanClient:
    """
    Thin Foreman API transport.

    - new_request(): build a prepared request for /api/<path>
    - send_and_parse(): send it and decode the JSON response

    Every send uses its own short-lived session, nothing is pooled.
    """

    def __init__(self, config: ForemanConfig):
        self.config = config

    def _url(self, path: str) -> str:
        return f"{self.config.api_url()}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "version=2,application/json",
            "Content-Type": "application/json",
        }

    def new_request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
    ) -> requests.PreparedRequest:
        method = method.upper()
        if method not in _METHODS:
            raise RequestBuildError(f"Unsupported HTTP method: {method}")
        if not path.startswith("/"):
            raise RequestBuildError(f"Request path must be absolute: {path!r}")

        req = requests.Request(
            method,
            self._url(path),
            data=body,
            headers=self._headers(),
            auth=(self.config.username, self.config.password),
        )
        try:
            return req.prepare()
        except (requests.RequestException, ValueError) as exc:
            raise RequestBuildError(f"Cannot build {method} {path}: {exc}") from exc

    def send_and_parse(
        self,
        req: requests.PreparedRequest,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> Optional[T]:
        """
        Send *req*; when *decode* is given, pass the JSON body through it.
        Without *decode* the body is discarded.
        """
        log.debug("%s %s", req.method, req.url)

        with requests.Session() as session:
            try:
                resp = session.send(
                    req,
                    timeout=self.config.timeout_seconds,
                    verify=self.config.verify_tls,
                )
            except requests.RequestException as exc:
                raise TransportError(f"{req.method} {req.url} failed: {exc}") from exc

        log.debug("response: status=%s", resp.status_code)

        if resp.status_code < 200 or resp.status_code >= 300:
            raise HTTPStatusError(resp.status_code, _error_message(resp), url=req.url)

        if decode is None:
            return None

        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON from {req.url}: {exc}") from exc
        return decode(data)
