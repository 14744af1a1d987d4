from dataclasses import dataclass

from hdfs_itt.errors import PortNotExposed

from .nat_map import EntryPoint, NatMap
from .provisioners import Provisioner


COORDINATOR_ORDINAL = 1


@dataclass(slots=True, frozen=True)
class Topology:
    nat_map: NatMap
    entry_point: EntryPoint


async def resolve_topology(
    provisioner: Provisioner,
    node_count: int,
    coordinator_port: int,
    data_port: int,
) -> Topology:
    """
    Build the NAT map and entry point for a cluster of ``node_count`` nodes.

    Node 1 hosts the coordinator (NameNode) and, like every other node, a
    data service. A port with no host mapping raises ``PortNotExposed``
    and no table is returned.
    """
    nat_map = NatMap()
    entry_point: EntryPoint | None = None

    for ordinal in range(1, node_count + 1):
        hostname = await provisioner.hostname_of(ordinal)

        if ordinal == COORDINATOR_ORDINAL:
            coordinator_address = await provisioner.host_address_of(
                ordinal,
                coordinator_port,
            )

            if not coordinator_address:
                raise PortNotExposed(ordinal, coordinator_port)

            nat_map.add(hostname, coordinator_port, coordinator_address)
            entry_point = EntryPoint.parse(coordinator_address)

        data_address = await provisioner.host_address_of(ordinal, data_port)
        if not data_address:
            raise PortNotExposed(ordinal, data_port)

        nat_map.add(hostname, data_port, data_address)

    if entry_point is None:
        raise PortNotExposed(COORDINATOR_ORDINAL, coordinator_port)

    return Topology(
        nat_map=nat_map,
        entry_point=entry_point,
    )
