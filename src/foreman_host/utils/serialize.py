# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/utils/serialize.py

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from foreman_host.api.models import IdRef


def to_jsonable(obj: Any) -> Any:
    if isinstance(obj, IdRef):
        return obj.as_int()

    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, list):
        return [to_jsonable(v) for v in obj]

    if isinstance(obj, Enum):
        return obj.value

    return obj
