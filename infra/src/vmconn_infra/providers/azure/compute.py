"""Azure virtual machine implementation of VmConnection."""

from __future__ import annotations

import logging
from typing import Any

import pulumi
from azure.mgmt.compute.models import OperatingSystemTypes

from vmconn_infra.components.compute import (
    ConnectionDescriptor,
    ConnectionOutputs,
    ConnectionProtocol,
    ConnectionSlot,
)
from vmconn_infra.components.network import (
    AddressResolver,
    ConnectionInfo,
    InterfaceReference,
    NetworkProfile,
    ResolutionContext,
)

logger: logging.Logger = logging.getLogger(__name__)


def publish_connection_info(
    info: ConnectionInfo,
    is_windows: bool,
    slot: ConnectionSlot | None = None,
) -> ConnectionDescriptor:
    """Select the provisioner connection for a resolved VM.

    A public address is used when one is available, falling back to the
    private address. The host may be empty; reachability is not checked.
    """
    protocol = ConnectionProtocol.WINRM if is_windows else ConnectionProtocol.SSH
    host = info.primary_public_address or info.primary_private_address
    descriptor = ConnectionDescriptor(type=protocol, host=host)

    if slot is not None:
        slot.set_conn_info(descriptor.as_dict())
    if not host:
        logger.warning("connection_host_unknown", extra={"type": protocol.value})
    return descriptor


def network_profile_from_vm(vm: Any) -> NetworkProfile | None:
    """Convert an ``azure.mgmt.compute`` ``VirtualMachine`` network profile."""
    profile = getattr(vm, "network_profile", None)
    if profile is None:
        return None

    nics = getattr(profile, "network_interfaces", None)
    if nics is None:
        return NetworkProfile()
    return NetworkProfile(network_interfaces=[InterfaceReference(id=nic.id) for nic in nics])


def is_windows_vm(vm: Any) -> bool:
    """Return True when ``vm`` should be provisioned over WinRM."""
    os_profile = getattr(vm, "os_profile", None)
    if os_profile is not None and getattr(os_profile, "windows_configuration", None) is not None:
        return True

    storage = getattr(vm, "storage_profile", None)
    os_disk = getattr(storage, "os_disk", None)
    os_type = getattr(os_disk, "os_type", None)
    if os_type is None:
        return False
    value = str(getattr(os_type, "value", os_type))
    return value.lower() == OperatingSystemTypes.WINDOWS.value.lower()


class AzureVmConnectionArgs:
    """Arguments for the Azure VM connection component.

    Args:
        network_profile: Network profile of the VM, possibly ``None``.
        resolver: Resolver used to aggregate the VM's interface addresses.
        windows: Provision over WinRM instead of SSH.
        lookup_timeout: Per-interface lookup timeout in seconds.
    """

    def __init__(
        self,
        network_profile: pulumi.Input[NetworkProfile | None],
        resolver: AddressResolver,
        windows: pulumi.Input[bool] = False,
        lookup_timeout: float | None = None,
    ) -> None:
        self.network_profile: pulumi.Input[NetworkProfile | None] = network_profile
        self.resolver: AddressResolver = resolver
        self.windows: pulumi.Input[bool] = windows
        self.lookup_timeout: float | None = lookup_timeout


class AzureVmConnection(pulumi.ComponentResource):
    """Connection details of an Azure VM satisfying ``VmConnection``.

    Resolves every address attached to the VM's network interfaces and
    publishes the ``{"type", "host"}`` descriptor provisioners connect with.
    The component is its own connection slot. Resolution runs inside an
    ``Output.apply`` callback, so interface lookups block the engine loop
    while they are in flight.
    """

    def __init__(
        self,
        name: str,
        args: AzureVmConnectionArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("vmconn:azure:VmConnection", name, {}, opts)

        logger.debug("resolving_azure_vm_connection", extra={"name": name})

        self._connection_args: AzureVmConnectionArgs = args
        self._conn_info: dict[str, str] | None = None

        resolved = pulumi.Output.all(args.network_profile, args.windows).apply(
            lambda values: self._resolve(values[0], bool(values[1]))
        )

        self._outputs: ConnectionOutputs = ConnectionOutputs(
            connection=resolved.apply(lambda r: r[1].as_dict()),
            private_ip_address=resolved.apply(lambda r: r[0].primary_private_address),
            private_ip_addresses=resolved.apply(lambda r: list(r[0].private_addresses)),
            public_ip_address=resolved.apply(lambda r: r[0].primary_public_address),
            public_ip_addresses=resolved.apply(lambda r: list(r[0].public_addresses)),
        )

        self.register_outputs(
            {
                "connection": self._outputs.connection,
                "private_ip_address": self._outputs.private_ip_address,
                "private_ip_addresses": self._outputs.private_ip_addresses,
                "public_ip_address": self._outputs.public_ip_address,
                "public_ip_addresses": self._outputs.public_ip_addresses,
            }
        )

    def _resolve(
        self, profile: NetworkProfile | None, windows: bool
    ) -> tuple[ConnectionInfo, ConnectionDescriptor]:
        context = ResolutionContext(timeout=self._connection_args.lookup_timeout)
        info = self._connection_args.resolver.resolve(profile, context)
        return info, publish_connection_info(info, windows, self)

    def set_conn_info(self, info: dict[str, str]) -> None:
        """Store the descriptor provisioners read; later writes replace it."""
        self._conn_info = dict(info)

    @property
    def conn_info(self) -> dict[str, str] | None:
        return self._conn_info

    @property
    def outputs(self) -> ConnectionOutputs:
        """Return the resolved connection outputs."""
        return self._outputs
