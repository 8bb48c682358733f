"""Azure network interface implementation of AddressResolver."""

from __future__ import annotations

import logging
from typing import Any

from azure.core.exceptions import AzureError
from azure.mgmt.network import NetworkManagementClient

from vmconn_infra.components.network import (
    ConnectionInfo,
    InterfaceAddresses,
    InterfaceLookupClient,
    InterfaceLookupError,
    InterfaceResource,
    IPConfiguration,
    NetworkProfile,
    PublicAddress,
    ResolutionContext,
    ResourceIdError,
    ResourceIdParser,
)
from vmconn_infra.providers.azure.resource_id import AzureResourceIdParser

logger: logging.Logger = logging.getLogger(__name__)

# Returns public IP resources inline, with their addresses.
PUBLIC_IP_EXPAND = "ipConfigurations/publicIPAddress"


def extract_addresses(interface: InterfaceResource) -> InterfaceAddresses:
    """Collect the private and public addresses of one network interface.

    Configurations are read in order. A missing configuration list, a
    configuration without a private address, or a public reference without
    an address simply contributes nothing.
    """
    if interface.ip_configurations is None:
        return InterfaceAddresses()

    private: list[str] = []
    public: list[str] = []
    for config in interface.ip_configurations:
        if config.private_ip_address is not None:
            private.append(config.private_ip_address)

        pip = config.public_ip_address
        if pip is not None and pip.ip_address:
            public.append(pip.ip_address)

    return InterfaceAddresses(private_addresses=tuple(private), public_addresses=tuple(public))


def _to_interface_resource(nic: Any) -> InterfaceResource:
    """Convert an ``azure.mgmt.network`` ``NetworkInterface`` model."""
    configs = getattr(nic, "ip_configurations", None)
    if configs is None:
        return InterfaceResource()

    converted: list[IPConfiguration] = []
    for config in configs:
        pip = getattr(config, "public_ip_address", None)
        converted.append(
            IPConfiguration(
                private_ip_address=getattr(config, "private_ip_address", None),
                public_ip_address=(
                    PublicAddress(ip_address=getattr(pip, "ip_address", None))
                    if pip is not None
                    else None
                ),
            )
        )
    return InterfaceResource(ip_configurations=converted)


class AzureInterfaceLookupClient:
    """Fetch network interfaces through ``NetworkManagementClient``.

    Every ``AzureError`` (not found, authorization, transport) is raised as
    ``InterfaceLookupError``.
    """

    def __init__(self, client: NetworkManagementClient) -> None:
        self._client: NetworkManagementClient = client

    def get(
        self, context: ResolutionContext, resource_group: str, name: str
    ) -> InterfaceResource:
        """Return the interface ``name`` in ``resource_group``."""
        if context.cancelled:
            raise InterfaceLookupError(f"lookup of {resource_group}/{name} cancelled")

        kwargs: dict[str, Any] = {"expand": PUBLIC_IP_EXPAND}
        if context.timeout is not None:
            kwargs["timeout"] = context.timeout

        try:
            nic = self._client.network_interfaces.get(resource_group, name, **kwargs)
        except AzureError as exc:
            raise InterfaceLookupError(
                f"failed to fetch network interface {resource_group}/{name}: {exc}"
            ) from exc

        return _to_interface_resource(nic)


class AzureAddressResolver:
    """Aggregate the addresses of every interface attached to a VM.

    Interfaces are processed one at a time in reference order. A reference
    that cannot be parsed or fetched is logged and skipped, so a fully
    failed resolution yields an empty ``ConnectionInfo``.
    """

    def __init__(
        self,
        client: InterfaceLookupClient,
        parser: ResourceIdParser | None = None,
    ) -> None:
        self._client: InterfaceLookupClient = client
        self._parser: ResourceIdParser = parser or AzureResourceIdParser()

    def resolve(
        self, profile: NetworkProfile | None, context: ResolutionContext | None = None
    ) -> ConnectionInfo:
        """Return the aggregated addresses reachable through ``profile``.

        If ``context`` is cancelled mid-way, the addresses gathered so far
        are returned.
        """
        if profile is None or profile.network_interfaces is None:
            return ConnectionInfo()

        context = context or ResolutionContext()
        private: list[str] = []
        public: list[str] = []

        for ref in profile.network_interfaces:
            if context.cancelled:
                logger.info(
                    "address_resolution_cancelled",
                    extra={"private_count": len(private), "public_count": len(public)},
                )
                break

            if not ref.id:
                continue

            addresses = self._addresses_for(context, ref.id)
            if addresses is None:
                continue

            private.extend(addresses.private_addresses)
            public.extend(addresses.public_addresses)

        info = ConnectionInfo.from_addresses(private, public)
        logger.debug(
            "connection_info_resolved",
            extra={
                "primary_private_address": info.primary_private_address,
                "primary_public_address": info.primary_public_address,
                "private_count": len(info.private_addresses),
                "public_count": len(info.public_addresses),
            },
        )
        return info

    def _addresses_for(self, context: ResolutionContext, nic_id: str) -> InterfaceAddresses | None:
        try:
            rid = self._parser.parse(nic_id)
        except ResourceIdError as exc:
            logger.warning("interface_id_invalid", extra={"nic_id": nic_id, "error": str(exc)})
            return None

        try:
            nic = self._client.get(context, rid.resource_group, rid.resource_name)
        except InterfaceLookupError as exc:
            logger.warning("interface_lookup_failed", extra={"nic_id": nic_id, "error": str(exc)})
            return None

        if nic.ip_configurations is None:
            return None

        return extract_addresses(nic)
