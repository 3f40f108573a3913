# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/api/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


HOST_ENDPOINT_PREFIX = "hosts"


class ProvisionMethod(str, Enum):
    BUILD = "build"   # network provisioning
    IMAGE = "image"   # clone from a reference image


class PXELoader(str, Enum):
    NONE = "None"
    PXELINUX_BIOS = "PXELinux BIOS"
    PXELINUX_UEFI = "PXELinux UEFI"
    GRUB_UEFI = "Grub UEFI"
    GRUB2_BIOS = "Grub2 BIOS"
    GRUB2_ELF = "Grub2 ELF"
    GRUB2_UEFI = "Grub2 UEFI"
    GRUB2_UEFI_SECUREBOOT = "Grub2 UEFI SecureBoot"
    GRUB2_UEFI_HTTP = "Grub2 UEFI HTTP"
    GRUB2_UEFI_HTTPS = "Grub2 UEFI HTTPS"
    GRUB2_UEFI_HTTPS_SECUREBOOT = "Grub2 UEFI HTTPS SecureBoot"
    IPXE_EMBEDDED = "iPXE Embedded"
    IPXE_UEFI_HTTP = "iPXE UEFI HTTP"
    IPXE_CHAIN_BIOS = "iPXE Chain BIOS"
    IPXE_CHAIN_UEFI = "iPXE Chain UEFI"


class PowerAction(str, Enum):
    ON = "on"
    OFF = "off"
    SOFT = "soft"     # reboot
    CYCLE = "cycle"   # hard reset
    STATE = "state"   # query only


class BootDevice(str, Enum):
    DISK = "disk"
    CDROM = "cdrom"
    PXE = "pxe"
    BIOS = "bios"


class BMCCommandKind(str, Enum):
    POWER = "power"
    BOOT = "boot"


# ---------------------------------------------------------------------
# Foreign keys
# ---------------------------------------------------------------------
class IdState(str, Enum):
    UNSET = "unset"
    CLEARED = "cleared"
    SET = "set"


@dataclass(frozen=True)
class IdRef:
    """
    Reference to another Foreman object (domain, hostgroup, ...).

    - unset:   leave the association alone (key is not sent)
    - cleared: remove the association (sent as null)
    - set:     point at object ``value``
    """
    state: IdState = IdState.UNSET
    value: int = 0

    @classmethod
    def unset(cls) -> "IdRef":
        return cls(IdState.UNSET)

    @classmethod
    def cleared(cls) -> "IdRef":
        return cls(IdState.CLEARED)

    @classmethod
    def of(cls, value: int) -> "IdRef":
        if value <= 0:
            return cls.cleared()
        return cls(IdState.SET, value)

    @classmethod
    def coerce(cls, value: Union[int, "IdRef", None]) -> "IdRef":
        if isinstance(value, IdRef):
            return value
        if value is None:
            return cls.unset()
        return cls.of(int(value))

    def as_int(self) -> int:
        return self.value if self.state is IdState.SET else 0


IdLike = Union[int, IdRef]


# ---------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------
@dataclass
class ForemanObject:
    """Attributes every Foreman resource carries."""
    id: int = 0
    name: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class InterfaceAttribute:
    """
    One network interface of a host.

    Foreman does not replace the interface list on update. New entries
    (id == 0) are created, entries left out are kept, and only entries
    with ``destroy`` set are removed.
    """
    id: int = 0
    subnet_id: int = 0
    identifier: str = ""
    name: str = ""
    username: str = ""            # BMC interfaces only
    password: str = field(default="", repr=False)  # BMC interfaces only
    managed: bool = False
    provision: bool = False
    virtual: bool = False
    primary: bool = False
    ip: str = ""
    mac: str = ""
    type: str = ""
    provider: str = ""
    destroy: bool = False         # wire-only removal marker


@dataclass
class Host(ForemanObject):
    """
    A host managed by Foreman.
    """
    build: bool = False                       # rebuild on next boot
    domain_id: IdLike = 0
    environment_id: IdLike = 0
    hostgroup_id: IdLike = 0
    operatingsystem_id: IdLike = 0
    provision_method: str = ""                # see ProvisionMethod
    pxe_loader: str = ""                      # see PXELoader
    enable_bmc: bool = False
    bmc_success: bool = False                 # local bookkeeping, never sent
    comment: str = ""
    managed: bool = True
    interfaces_attributes: List[InterfaceAttribute] = field(default_factory=list)


# ---------------------------------------------------------------------
# BMC commands
# ---------------------------------------------------------------------
@dataclass
class BMCPower:
    """
    Power command. On send ``power_action`` carries the intent; on receive
    ``power`` carries the result (a bool, or "on"/"off" for a state query).
    """
    power_action: Optional[str] = None
    power: Optional[Union[bool, str]] = None

    kind = BMCCommandKind.POWER


@dataclass
class BMCBootResult:
    action: Optional[str] = None
    result: Optional[bool] = None


@dataclass
class BMCBoot:
    device: Optional[str] = None
    boot: BMCBootResult = field(default_factory=BMCBootResult)

    kind = BMCCommandKind.BOOT


BMCCommand = Union[BMCPower, BMCBoot]
