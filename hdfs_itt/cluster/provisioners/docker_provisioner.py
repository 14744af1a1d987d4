import asyncio
import pathlib

from hdfs_itt.cluster.command_runner import CommandRunner
from hdfs_itt.config import ITTConfig
from hdfs_itt.errors import ConfigurationError

from .provisioner import Provisioner


class DockerProvisioner(Provisioner):
    """
    Bigtop's docker-compose back end: one container per node, with host
    ports assigned by docker and read back from the live compose project.
    """

    name = "docker"

    def __init__(
        self,
        config: ITTConfig,
        runner: CommandRunner,
    ) -> None:
        super().__init__(runner)
        self._config = config
        self._directory = pathlib.Path(config.bigtop_root) / "provisioner" / "docker"
        self._provision_id: str | None = None

    async def up(self) -> None:
        pass

    async def down(self) -> None:
        pass

    async def ssh(self) -> None:
        raise ConfigurationError(
            "ssh is not supported by the docker provisioner",
            provisioner=self.name,
        )

    async def exec(self, ordinal: int, command: str) -> str:
        return await self._runner.run(
            ["./docker-hadoop.sh", "--exec", str(ordinal), command],
            cwd=self._directory,
        )

    async def hostname_of(self, ordinal: int) -> str:
        hostname = await self.exec(ordinal, "hostname -f")
        return hostname.strip()

    async def _get_provision_id(self) -> str:
        if self._provision_id is None:
            loop = asyncio.get_event_loop()
            provision_id = await loop.run_in_executor(
                None,
                (self._directory / ".provision_id").read_text,
            )

            self._provision_id = provision_id.strip()

        return self._provision_id

    async def host_address_of(self, ordinal: int, port: int) -> str | None:
        provision_id = await self._get_provision_id()
        mapping = await self._runner.run(
            [
                "docker-compose",
                "-p",
                provision_id,
                "port",
                f"--index={ordinal}",
                "bigtop",
                str(port),
            ],
            cwd=self._directory,
            check=False,
        )

        # Compose versions differ in how they report an unpublished port.
        host_port = mapping.strip().rpartition(":")[2]
        if not host_port.isdigit() or int(host_port) == 0:
            return None

        return f"{self._config.local_host}:{host_port}"
