# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/api/codec.py

"""
Wire format for hosts and BMC commands.

Encoding and decoding are NOT inverses of each other. Foreman accepts
``interfaces_attributes`` on write but returns ``interfaces`` on read,
and it sends numeric ids back as JSON numbers that may be floats. Each
direction therefore has its own field table below.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from foreman_host.api.errors import DecodeError, EncodingError
from foreman_host.api.models import (
    BMCBoot,
    BMCBootResult,
    BMCPower,
    ForemanObject,
    Host,
    IdLike,
    IdRef,
    IdState,
    InterfaceAttribute,
)

log = logging.getLogger("foreman_host")

_UNSET = object()

_HOST_FOREIGN_KEYS = (
    "domain_id",
    "operatingsystem_id",
    "hostgroup_id",
    "environment_id",
)


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def id_to_json(value: IdLike) -> Any:
    """
    Convert a foreign key into what Foreman expects.

    Returns ``_UNSET`` when the key must not be sent at all, ``None`` to
    clear the association, the integer id otherwise.
    """
    ref = IdRef.coerce(value)
    if ref.state is IdState.UNSET:
        return _UNSET
    if ref.state is IdState.CLEARED:
        return None
    return ref.value


def _get_bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _get_str(data: Mapping[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _get_int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    # bool is an int subclass; never read true/false as 1/0
    value = data.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


def _get_opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _as_object(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(payload).__name__}")
    return payload


def to_json_body(obj: Any) -> bytes:
    try:
        return json.dumps(obj, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Cannot serialize request body: {exc}") from exc


def redact(payload: Any) -> Any:
    """Copy of *payload* with password values masked, for debug logs."""
    if isinstance(payload, dict):
        return {
            k: ("********" if k == "password" and v else redact(v))
            for k, v in payload.items()
        }
    if isinstance(payload, list):
        return [redact(v) for v in payload]
    return payload


# ---------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------
def encode_interface(iface: InterfaceAttribute) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if iface.id:
        data["id"] = iface.id
    data.update(
        {
            "subnet_id": iface.subnet_id,
            "identifier": iface.identifier,
            "name": iface.name,
            "username": iface.username,
            "password": iface.password,
            "managed": iface.managed,
            "provision": iface.provision,
            "virtual": iface.virtual,
            "primary": iface.primary,
            "ip": iface.ip,
            "mac": iface.mac,
            "type": iface.type,
            "provider": iface.provider,
        }
    )
    # Foreman treats the mere presence of _destroy as meaningful
    if iface.destroy:
        data["_destroy"] = True
    return data


def decode_interface(payload: Any) -> InterfaceAttribute:
    data = _as_object(payload, "interface")
    return InterfaceAttribute(
        id=_get_int(data, "id"),
        subnet_id=_get_int(data, "subnet_id"),
        identifier=_get_str(data, "identifier"),
        name=_get_str(data, "name"),
        username=_get_str(data, "username"),
        password=_get_str(data, "password"),
        managed=_get_bool(data, "managed", False),
        provision=_get_bool(data, "provision", False),
        virtual=_get_bool(data, "virtual", False),
        primary=_get_bool(data, "primary", False),
        ip=_get_str(data, "ip"),
        mac=_get_str(data, "mac"),
        type=_get_str(data, "type"),
        provider=_get_str(data, "provider"),
    )


# ---------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------
def encode_host(host: Host) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "name": host.name,
        "comment": host.comment,
        "managed": host.managed,
        "build": host.build,
        "provision_method": host.provision_method,
        "pxe_loader": host.pxe_loader,
    }
    for key in _HOST_FOREIGN_KEYS:
        value = id_to_json(getattr(host, key))
        if value is not _UNSET:
            body[key] = value

    # An empty list would read as "drop every interface"
    if host.interfaces_attributes:
        body["interfaces_attributes"] = [
            encode_interface(i) for i in host.interfaces_attributes
        ]

    payload = {"host": body}
    log.debug("encoded host: %s", redact(payload))
    return payload


def decode_object(data: Mapping[str, Any]) -> ForemanObject:
    return ForemanObject(
        id=_get_int(data, "id"),
        name=_get_str(data, "name"),
        created_at=_get_opt_str(data, "created_at"),
        updated_at=_get_opt_str(data, "updated_at"),
    )


def _unwrap_host(payload: Any) -> Dict[str, Any]:
    data = _as_object(payload, "host")
    inner = data.get("host")
    if isinstance(inner, dict) and "id" not in data:
        return inner
    return data


def decode_host(payload: Any) -> Host:
    data = _unwrap_host(payload)
    log.debug("decoding host: %s", redact(data))

    # 1) common object attributes
    base = decode_object(data)

    # 2) interfaces come back under a different key than they are sent
    raw_ifaces = data.get("interfaces")
    interfaces: List[InterfaceAttribute] = []
    if isinstance(raw_ifaces, list):
        interfaces = [decode_interface(i) for i in raw_ifaces]

    # 3) scalars, with explicit defaults so that missing keys never
    #    silently reset local state to zero values
    return Host(
        id=base.id,
        name=base.name,
        created_at=base.created_at,
        updated_at=base.updated_at,
        build=_get_bool(data, "build", False),
        comment=_get_str(data, "comment", ""),
        managed=_get_bool(data, "managed", True),
        domain_id=_get_int(data, "domain_id", 0),
        environment_id=_get_int(data, "environment_id", 0),
        hostgroup_id=_get_int(data, "hostgroup_id", 0),
        operatingsystem_id=_get_int(data, "operatingsystem_id", 0),
        provision_method=_get_str(data, "provision_method", ""),
        pxe_loader=_get_str(data, "pxe_loader", ""),
        interfaces_attributes=interfaces,
    )


# ---------------------------------------------------------------------
# BMC commands
# ---------------------------------------------------------------------
def encode_bmc_power(cmd: BMCPower) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if cmd.power_action:
        data["power_action"] = cmd.power_action
    if cmd.power is not None:
        data["power"] = cmd.power
    return data


def encode_bmc_boot(cmd: BMCBoot) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if cmd.device:
        data["device"] = cmd.device
    boot: Dict[str, Any] = {}
    if cmd.boot.action:
        boot["action"] = cmd.boot.action
    if cmd.boot.result is not None:
        boot["result"] = cmd.boot.result
    if boot:
        data["boot"] = boot
    return data


def decode_bmc_power(payload: Any) -> BMCPower:
    data = _as_object(payload, "power response")
    power = data.get("power")
    if not isinstance(power, (bool, str)):
        power = None
    return BMCPower(power_action=_get_opt_str(data, "power_action"), power=power)


def decode_bmc_boot(payload: Any) -> BMCBoot:
    data = _as_object(payload, "boot response")
    raw = data.get("boot")
    result = BMCBootResult()
    if isinstance(raw, dict):
        value = raw.get("result")
        result = BMCBootResult(
            action=_get_opt_str(raw, "action"),
            result=value if isinstance(value, bool) else None,
        )
    return BMCBoot(device=_get_opt_str(data, "device"), boot=result)
