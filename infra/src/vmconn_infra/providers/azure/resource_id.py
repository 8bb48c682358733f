"""Azure Resource Manager identifier parsing."""

from __future__ import annotations

import logging

from azure.mgmt.core.tools import parse_resource_id

from vmconn_infra.components.network import ResourceId, ResourceIdError

logger: logging.Logger = logging.getLogger(__name__)

NETWORK_INTERFACES = "networkInterfaces"
VIRTUAL_MACHINES = "virtualMachines"


class AzureResourceIdParser:
    """Split ARM resource IDs of one resource type into group and name.

    Child segments (``.../networkInterfaces/nic/ipConfigurations/ipconfig1``)
    resolve to the top-level resource.
    """

    def __init__(self, resource_type: str = NETWORK_INTERFACES) -> None:
        self.resource_type: str = resource_type

    def parse(self, identifier: str) -> ResourceId:
        """Return the resource group and name encoded in ``identifier``.

        Raises ``ResourceIdError`` when the identifier has no resource group,
        names a different resource type, or has no resource name.
        """
        parts = parse_resource_id(identifier)
        resource_group = parts.get("resource_group")
        if not resource_group:
            raise ResourceIdError(f"no resource group in {identifier!r}")

        resource_type = parts.get("type", "")
        if resource_type.lower() != self.resource_type.lower():
            raise ResourceIdError(
                f"expected a {self.resource_type} identifier, got {resource_type or 'none'!r}"
                f" in {identifier!r}"
            )

        name = parts.get("name")
        if not name:
            raise ResourceIdError(f"no {self.resource_type} name in {identifier!r}")

        return ResourceId(resource_group=resource_group, resource_name=name)
