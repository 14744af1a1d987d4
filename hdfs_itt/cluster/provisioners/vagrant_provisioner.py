import pathlib

from hdfs_itt.cluster.command_runner import CommandRunner
from hdfs_itt.config import ITTConfig

from .provisioner import Provisioner


class VagrantProvisioner(Provisioner):
    """
    Bigtop's Vagrant back end: every service of a node runs inside one VM,
    and forwarded ports follow a fixed arithmetic layout.
    """

    name = "vagrant"

    def __init__(
        self,
        config: ITTConfig,
        runner: CommandRunner,
    ) -> None:
        super().__init__(runner)
        self._config = config
        self._directory = pathlib.Path(config.bigtop_root) / "provisioner" / "vagrant"

    async def _vagrant(self, *args: str, capture: bool = True) -> str:
        return await self._runner.run(
            ["vagrant", *args],
            cwd=self._directory,
            capture=capture,
        )

    async def up(self) -> None:
        await self._vagrant("up", capture=False)

    async def down(self) -> None:
        await self._vagrant("suspend", capture=False)

    async def ssh(self) -> None:
        await self._vagrant("ssh", capture=False)

    async def exec(self, ordinal: int, command: str) -> str:
        return await self._vagrant("ssh", f"bigtop{ordinal}", "-c", command)

    async def hostname_of(self, ordinal: int) -> str:
        return f"bigtop{ordinal}.vagrant"

    async def host_address_of(self, ordinal: int, port: int) -> str | None:
        if port == self._config.coordinator_port:
            host_port = self._config.vagrant_coordinator_host_port

        elif port == self._config.data_port:
            host_port = (
                self._config.vagrant_data_host_port_base
                + ordinal * self._config.vagrant_data_host_port_stride
            )

        else:
            return None

        return f"{self._config.local_host}:{host_port}"
