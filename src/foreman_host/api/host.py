# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/api/host.py

from __future__ import annotations

import logging
from urllib.parse import quote
from typing import Any, Callable, TypeVar

from foreman_host.api.codec import (
    decode_bmc_boot,
    decode_bmc_power,
    decode_host,
    encode_bmc_boot,
    encode_bmc_power,
    encode_host,
    redact,
    to_json_body,
)
from foreman_host.api.errors import (
    BMCOperationError,
    ForemanError,
    InvalidBMCCommandError,
)
from foreman_host.api.interface import Transport
from foreman_host.api.models import (
    HOST_ENDPOINT_PREFIX,
    BMCBoot,
    BMCCommand,
    BMCCommandKind,
    BMCPower,
    BootDevice,
    Host,
    PowerAction,
)
from foreman_host.utils.retry import call_with_retry
from foreman_host.utils.serialize import to_jsonable

log = logging.getLogger("foreman_host")

T = TypeVar("T")


def _power_failed(cmd: BMCPower) -> bool:
    return cmd.power is False


def _boot_failed(cmd: BMCBoot) -> bool:
    return cmd.boot.result is False


# kind -> (url suffix, encoder, decoder, failure check)
_BMC_DISPATCH = {
    BMCCommandKind.POWER: ("power", encode_bmc_power, decode_bmc_power, _power_failed),
    BMCCommandKind.BOOT: ("boot", encode_bmc_boot, decode_bmc_boot, _boot_failed),
}


class HostManager:
    """
    Host lifecycle and BMC operations against the Foreman API:
      - create / read / update / delete
      - power and boot-device commands

    create, update and BMC commands resend the same prepared request up to
    ``retry_count`` times. Every failure from the transport is retried,
    including validation errors returned by Foreman.
    """

    def __init__(self, transport: Transport, *, retry_delay: float = 0):
        self.transport = transport
        self.retry_delay = retry_delay

    # -----------------------
    # Helpers
    # -----------------------
    def _send_with_retry(
        self,
        req: Any,
        decode: Callable[[Any], T],
        retry_count: int,
        label: str,
    ) -> T:
        def on_retry(attempt: int, exc: Exception) -> None:
            log.debug("%s: attempt #%d failed: %s", label, attempt, exc)

        return call_with_retry(
            lambda: self.transport.send_and_parse(req, decode),
            retries=retry_count,
            delay=self.retry_delay,
            on_retry=on_retry,
        )

    @staticmethod
    def _host_path(id_or_name: Any = None) -> str:
        if id_or_name is None:
            return f"/{HOST_ENDPOINT_PREFIX}"
        return f"/{HOST_ENDPOINT_PREFIX}/{id_or_name}"

    # -----------------------
    # CRUD
    # -----------------------
    def create_host(self, host: Host, retry_count: int) -> Host:
        """
        Create *host* and return the server's view of it, with id and
        server-side defaults filled in.
        """
        body = to_json_body(encode_host(host))
        req = self.transport.new_request("POST", self._host_path(), body)

        created = self._send_with_retry(req, decode_host, retry_count, "CreateHost")
        log.debug("created host: %s", redact(to_jsonable(created)))
        return created

    def read_host(self, host_id: int) -> Host:
        req = self.transport.new_request("GET", self._host_path(host_id))
        host = self.transport.send_and_parse(req, decode_host)
        log.debug("read host: %s", redact(to_jsonable(host)))
        return host

    def update_host(self, host: Host, retry_count: int) -> Host:
        """
        Update the host with ``host.id``. Returns a new Host built from the
        response.
        """
        body = to_json_body(encode_host(host))
        req = self.transport.new_request("PUT", self._host_path(host.id), body)

        updated = self._send_with_retry(req, decode_host, retry_count, "UpdateHost")
        log.debug("updated host: %s", redact(to_jsonable(updated)))
        return updated

    def delete_host(self, host_id: int) -> None:
        req = self.transport.new_request("DELETE", self._host_path(host_id))
        self.transport.send_and_parse(req, None)

    # -----------------------
    # BMC
    # -----------------------
    def send_bmc_command(self, host: Host, cmd: BMCCommand, retry_count: int) -> BMCCommand:
        """
        Send a power or boot command to the BMC of *host*.

        Example: PUT https://<foreman>/api/hosts/<hostname>/boot

        Succeeds only when the request went through AND Foreman reports the
        operation itself as successful. Returns the decoded response.
        """
        kind = getattr(cmd, "kind", None)
        entry = _BMC_DISPATCH.get(kind) if isinstance(kind, BMCCommandKind) else None
        if entry is None:
            raise InvalidBMCCommandError(f"Invalid BMC operation: [{cmd!r}]")
        suffix, encode, decode, failed = entry

        payload = encode(cmd)
        log.debug("BMC %s body: %s", suffix, payload)
        body = to_json_body(payload)
        # names are a single path segment
        path = self._host_path(f"{quote(host.name, safe='')}/{suffix}")
        req = self.transport.new_request("PUT", path, body)

        result = self._send_with_retry(req, decode, retry_count, f"SendBMC[{suffix}]")
        log.debug("BMC response: %s", to_jsonable(result))

        if failed(result):
            raise BMCOperationError(
                f"Failed BMC {suffix} operation on {host.name}", response=result
            )
        return result

    def power(self, host: Host, action: str, retry_count: int) -> BMCPower:
        """
        Run a power action and record the outcome in ``host.bmc_success``.
        """
        try:
            action = PowerAction(action)
        except ValueError:
            raise InvalidBMCCommandError(f"Invalid power action: {action!r}") from None
        return self._tracked(host, BMCPower(power_action=action.value), retry_count)

    def boot(self, host: Host, device: str, retry_count: int) -> BMCBoot:
        """
        Select the next boot device and record the outcome in
        ``host.bmc_success``.
        """
        try:
            device = BootDevice(device)
        except ValueError:
            raise InvalidBMCCommandError(f"Invalid boot device: {device!r}") from None
        return self._tracked(host, BMCBoot(device=device.value), retry_count)

    def _tracked(self, host: Host, cmd: BMCCommand, retry_count: int) -> BMCCommand:
        try:
            result = self.send_bmc_command(host, cmd, retry_count)
        except ForemanError:
            host.bmc_success = False
            raise
        host.bmc_success = True
        return result
