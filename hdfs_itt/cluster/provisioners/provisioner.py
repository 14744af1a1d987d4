from abc import ABC, abstractmethod

from hdfs_itt.cluster.command_runner import CommandRunner


class Provisioner(ABC):
    """
    Capability set a provisioning back end exposes to the rest of the tool.

    Back ends differ only in how they bring the cluster up and down, run a
    command as a node, and map a node's internal ports onto the test host.
    """

    name: str = "provisioner"

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    @abstractmethod
    async def up(self) -> None: ...

    @abstractmethod
    async def down(self) -> None: ...

    @abstractmethod
    async def ssh(self) -> None: ...

    @abstractmethod
    async def exec(self, ordinal: int, command: str) -> str:
        """Run ``command`` as node ``ordinal`` and return its stdout."""
        ...

    @abstractmethod
    async def hostname_of(self, ordinal: int) -> str: ...

    @abstractmethod
    async def host_address_of(self, ordinal: int, port: int) -> str | None:
        """
        Return the ``host:port`` reaching ``port`` on node ``ordinal``, or
        ``None`` when the port is not exposed to the test host.
        """
        ...
