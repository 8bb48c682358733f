"""Verify that component interfaces and value types behave as documented."""
from __future__ import annotations

import pulumi

from vmconn_infra.components.compute import (
    ConnectionDescriptor,
    ConnectionOutputs,
    ConnectionProtocol,
    ConnectionSlot,
    VmConnection,
)
from vmconn_infra.components.network import (
    AddressResolver,
    ConnectionInfo,
    InterfaceLookupError,
    NetworkProfile,
    ResolutionContext,
    ResourceIdError,
    VmConnError,
)
from vmconn_infra.providers.azure.compute import AzureVmConnection, AzureVmConnectionArgs


class StubResolver:
    def resolve(
        self, profile: NetworkProfile | None, context: ResolutionContext | None = None
    ) -> ConnectionInfo:
        return ConnectionInfo.from_addresses(["10.0.0.4"], [])


def test_stub_resolver_satisfies_address_resolver() -> None:
    resolver: AddressResolver = StubResolver()
    args = AzureVmConnectionArgs(network_profile=NetworkProfile(), resolver=resolver)
    assert args.resolver.resolve(NetworkProfile()).primary_private_address == "10.0.0.4"
    assert isinstance(args.resolver, AddressResolver)
    assert not isinstance(object(), AddressResolver)


def test_vm_connection_component_is_a_connection_slot() -> None:
    assert issubclass(AzureVmConnection, ConnectionSlot)


def test_vm_connection_component_exposes_outputs_property() -> None:
    assert isinstance(getattr(AzureVmConnection, "outputs"), property)
    assert isinstance(getattr(VmConnection, "outputs"), property)


def test_connection_protocol_values() -> None:
    assert ConnectionProtocol.SSH == "ssh"
    assert ConnectionProtocol.WINRM == "winrm"


def test_errors_share_base_class() -> None:
    assert issubclass(ResourceIdError, VmConnError)
    assert issubclass(InterfaceLookupError, VmConnError)


def test_empty_connection_info() -> None:
    info = ConnectionInfo()
    assert info.primary_private_address == ""
    assert info.private_addresses == ()
    assert info.primary_public_address == ""
    assert info.public_addresses == ()
    assert ConnectionInfo.from_addresses([], []) == info


def test_connection_info_primaries_match_first_address() -> None:
    info = ConnectionInfo.from_addresses(["10.0.0.4", "10.0.0.4"], ["20.1.1.1"])
    assert info.primary_private_address == info.private_addresses[0]
    assert info.primary_public_address == info.public_addresses[0]
    assert info.private_addresses == ("10.0.0.4", "10.0.0.4")


def test_connection_descriptor_as_dict() -> None:
    descriptor = ConnectionDescriptor(type=ConnectionProtocol.WINRM, host="20.1.1.1")
    assert descriptor.as_dict() == {"type": "winrm", "host": "20.1.1.1"}


def test_resolution_context_cancel() -> None:
    context = ResolutionContext(timeout=3.0)
    assert not context.cancelled
    context.cancel()
    assert context.cancelled
    assert context.timeout == 3.0


def test_connection_outputs_constructible() -> None:
    outputs = ConnectionOutputs(
        connection=pulumi.Output.from_input({"type": "ssh", "host": "10.0.0.4"}),
        private_ip_address=pulumi.Output.from_input("10.0.0.4"),
        private_ip_addresses=pulumi.Output.from_input(["10.0.0.4"]),
        public_ip_address=pulumi.Output.from_input(""),
        public_ip_addresses=pulumi.Output.from_input([]),
    )
    assert outputs is not None
