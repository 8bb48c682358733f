"""Provider-agnostic network address resolution interface."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger: logging.Logger = logging.getLogger(__name__)


class VmConnError(Exception):
    """Base class for errors raised while resolving VM connection details."""


class ResourceIdError(VmConnError):
    """A resource identifier cannot be decomposed into group and name."""


class InterfaceLookupError(VmConnError):
    """A network interface could not be fetched (not found, auth, transport)."""


@dataclass(frozen=True)
class InterfaceReference:
    id: str | None = None


@dataclass(frozen=True)
class NetworkProfile:
    """Ordered network interface references attached to one instance."""

    network_interfaces: list[InterfaceReference] | None = None


@dataclass(frozen=True)
class PublicAddress:
    ip_address: str | None = None


@dataclass(frozen=True)
class IPConfiguration:
    """One address-assignment slot on a network interface."""

    private_ip_address: str | None = None
    public_ip_address: PublicAddress | None = None


@dataclass(frozen=True)
class InterfaceResource:
    ip_configurations: list[IPConfiguration] | None = None


@dataclass(frozen=True)
class InterfaceAddresses:
    private_addresses: tuple[str, ...] = ()
    public_addresses: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConnectionInfo:
    """Aggregated addresses of one instance with designated primaries.

    A primary address is either ``""`` or the first element of the matching
    address list. Duplicates across interfaces are retained.
    """

    primary_private_address: str = ""
    private_addresses: tuple[str, ...] = ()
    primary_public_address: str = ""
    public_addresses: tuple[str, ...] = ()

    @classmethod
    def from_addresses(
        cls, private_addresses: Iterable[str], public_addresses: Iterable[str]
    ) -> ConnectionInfo:
        """Build a record whose primaries are the first address of each kind."""
        private = tuple(private_addresses)
        public = tuple(public_addresses)
        return cls(
            primary_private_address=private[0] if private else "",
            private_addresses=private,
            primary_public_address=public[0] if public else "",
            public_addresses=public,
        )


@dataclass(frozen=True)
class ResourceId:
    resource_group: str
    resource_name: str


@dataclass
class ResolutionContext:
    """Caller-owned context threaded through every interface lookup.

    Args:
        timeout: Optional per-lookup timeout in seconds, honoured by the
            lookup client.
    """

    timeout: float | None = None
    _cancelled: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    def cancel(self) -> None:
        """Request that any in-progress resolution stop before its next lookup."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


class ResourceIdParser(Protocol):
    def parse(self, identifier: str) -> ResourceId:
        """Split ``identifier`` or raise ``ResourceIdError``."""
        ...


class InterfaceLookupClient(Protocol):
    def get(
        self, context: ResolutionContext, resource_group: str, name: str
    ) -> InterfaceResource:
        """Fetch one interface or raise ``InterfaceLookupError``."""
        ...


@runtime_checkable
class AddressResolver(Protocol):
    """Provider-agnostic interface for instance address aggregation."""

    def resolve(
        self, profile: NetworkProfile | None, context: ResolutionContext | None = None
    ) -> ConnectionInfo:
        """Return every address reachable through ``profile``."""
        ...
