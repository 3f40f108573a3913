# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations
from typing import Any, Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class Transport(Protocol):
    def new_request(self, method: str, path: str, body: Optional[bytes] = None) -> Any: ...

    def send_and_parse(self, req: Any, decode: Optional[Callable[[Any], T]] = None) -> Optional[T]: ...
