# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/api/errors.py

from __future__ import annotations

from typing import Optional


class ForemanError(RuntimeError):
    """Base class for all foreman-host failures."""


class EncodingError(ForemanError):
    """Local data could not be serialized into a request body."""


class RequestBuildError(ForemanError):
    """The transport rejected the method, path or body of a request."""


class ForemanAPIError(ForemanError):
    """Raised when sending a request or decoding its response fails.

    Everything under this class is retried by the request executor.
    """


class TransportError(ForemanAPIError):
    """Connection, TLS or timeout failure talking to Foreman."""


class HTTPStatusError(ForemanAPIError):
    def __init__(self, status_code: int, message: str, *, url: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"Foreman returned {status_code} for {url}: {message}")


class DecodeError(ForemanAPIError):
    """Response body is not JSON or not the expected shape."""


class InvalidBMCCommandError(ForemanError):
    """Command is neither a power nor a boot command."""


class BMCOperationError(ForemanError):
    """Foreman accepted the BMC command but reported it as failed."""

    def __init__(self, message: str, *, response=None):
        self.response = response
        super().__init__(message)
