"""Provider-agnostic connection descriptor for remote provisioning."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class ConnectionProtocol(StrEnum):
    """Remote-access protocol used by provisioners."""

    SSH = "ssh"
    WINRM = "winrm"


@dataclass(frozen=True)
class ConnectionDescriptor:
    type: ConnectionProtocol
    host: str

    def as_dict(self) -> dict[str, str]:
        """Return the two-key mapping consumed by provisioners."""
        return {"type": self.type.value, "host": self.host}


@runtime_checkable
class ConnectionSlot(Protocol):
    """Sink the provisioning subsystem reads connection details from."""

    def set_conn_info(self, info: dict[str, str]) -> None: ...


class ConnectionOutputs:
    """Resolved outputs from a VM connection component."""

    def __init__(
        self,
        connection: pulumi.Output[dict[str, str]],
        private_ip_address: pulumi.Output[str],
        private_ip_addresses: pulumi.Output[list[str]],
        public_ip_address: pulumi.Output[str],
        public_ip_addresses: pulumi.Output[list[str]],
    ) -> None:
        """Initialise connection outputs.

        Args:
            connection: ``{"type", "host"}`` descriptor for provisioners.
            private_ip_address: Primary private address, or ``""``.
            private_ip_addresses: Every private address in interface order.
            public_ip_address: Primary public address, or ``""``.
            public_ip_addresses: Every public address in interface order.
        """
        self.connection: pulumi.Output[dict[str, str]] = connection
        self.private_ip_address: pulumi.Output[str] = private_ip_address
        self.private_ip_addresses: pulumi.Output[list[str]] = private_ip_addresses
        self.public_ip_address: pulumi.Output[str] = public_ip_address
        self.public_ip_addresses: pulumi.Output[list[str]] = public_ip_addresses


class VmConnection(Protocol):
    """Provider-agnostic interface for the VM connection component."""

    @property
    def outputs(self) -> ConnectionOutputs:
        """Return the resolved connection outputs."""
        ...
