"""Pulumi stack entry point for VM connection resolution."""

from __future__ import annotations

import logging
from typing import Any

import pulumi
import structlog
from azure.identity import DefaultAzureCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.network import NetworkManagementClient

from vmconn_infra.config import CloudProvider, StackConfig
from vmconn_infra.providers.azure.compute import (
    AzureVmConnection,
    AzureVmConnectionArgs,
    is_windows_vm,
    network_profile_from_vm,
)
from vmconn_infra.providers.azure.network import (
    AzureAddressResolver,
    AzureInterfaceLookupClient,
)
from vmconn_infra.providers.azure.resource_id import VIRTUAL_MACHINES, AzureResourceIdParser

logger: logging.Logger = logging.getLogger(__name__)


class VmConnStack:
    """Resolves and exports the provisioner connection of one VM."""

    def __init__(
        self,
        config: StackConfig,
        compute_client: Any | None = None,
        network_client: Any | None = None,
    ) -> None:
        """Initialise the stack with resolved configuration.

        Azure SDK clients are built from ``DefaultAzureCredential`` unless
        supplied.
        """
        self._config: StackConfig = config
        self._compute_client: Any | None = compute_client
        self._network_client: Any | None = network_client

    def run(self) -> AzureVmConnection:
        """Resolve the configured VM and export its connection details."""
        logger.info(
            "stack_run_started",
            extra={"cloud_provider": self._config.cloud_provider.value},
        )
        if self._config.cloud_provider == CloudProvider.AZURE:
            return self._run_azure()
        raise NotImplementedError(
            f"Provider '{self._config.cloud_provider}' not yet implemented."
        )

    def _clients(self) -> tuple[Any, Any]:
        if self._compute_client is None or self._network_client is None:
            credential = DefaultAzureCredential()
            subscription_id = self._config.subscription_id
            if self._compute_client is None:
                self._compute_client = ComputeManagementClient(credential, subscription_id)
            if self._network_client is None:
                self._network_client = NetworkManagementClient(credential, subscription_id)
        return self._compute_client, self._network_client

    def _run_azure(self) -> AzureVmConnection:
        config = self._config
        compute_client, network_client = self._clients()

        vm_id = AzureResourceIdParser(VIRTUAL_MACHINES).parse(config.vm_id)
        vm = compute_client.virtual_machines.get(vm_id.resource_group, vm_id.resource_name)
        windows = config.windows if config.windows is not None else is_windows_vm(vm)

        connection = AzureVmConnection(
            vm_id.resource_name,
            AzureVmConnectionArgs(
                network_profile=network_profile_from_vm(vm),
                resolver=AzureAddressResolver(AzureInterfaceLookupClient(network_client)),
                windows=windows,
                lookup_timeout=config.lookup_timeout,
            ),
        )

        pulumi.export("connection", connection.outputs.connection)
        pulumi.export("private_ip_address", connection.outputs.private_ip_address)
        pulumi.export("private_ip_addresses", connection.outputs.private_ip_addresses)
        pulumi.export("public_ip_address", connection.outputs.public_ip_address)
        pulumi.export("public_ip_addresses", connection.outputs.public_ip_addresses)
        return connection


if __name__ == "__main__":
    stack_config = StackConfig.load()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(stack_config.log_level_number)
    )
    VmConnStack(config=stack_config).run()
