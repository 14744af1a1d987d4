import shlex

from hdfs_itt.logging import ClusterCommandDebug, Logger

from .checksum_record import ChecksumRecord
from .provisioners import Provisioner


NAMENODE_ORDINAL = 1


class HdfsShell:
    """
    ``hdfs dfs`` commands issued through node 1 of the cluster.
    """

    def __init__(
        self,
        provisioner: Provisioner,
        logger: Logger | None = None,
        log_path: str | None = None,
    ) -> None:
        self._provisioner = provisioner
        self._logger = logger or Logger()
        self._log_path = log_path

    async def _dfs(self, *args: str) -> str:
        command = shlex.join(["hdfs", "dfs", *args])

        async with self._logger.context(
            name="hdfs_shell",
            path=self._log_path,
        ) as ctx:
            await ctx.log(
                ClusterCommandDebug(
                    message=f"Running '{command}' on node {NAMENODE_ORDINAL}",
                    ordinal=NAMENODE_ORDINAL,
                    command=command,
                )
            )

        return await self._provisioner.exec(NAMENODE_ORDINAL, command)

    async def mkdir(self, path: str, parents: bool = False) -> None:
        if parents:
            await self._dfs("-mkdir", "-p", path)

        else:
            await self._dfs("-mkdir", path)

    async def put(self, local_path: str, remote_directory: str) -> None:
        await self._dfs("-put", "-f", local_path, remote_directory)

    async def remove(self, *paths: str, recursive: bool = False) -> None:
        flags = ["-r", "-f"] if recursive else ["-f"]
        await self._dfs("-rm", *flags, "-skipTrash", *paths)

    async def checksum(self, path: str) -> ChecksumRecord:
        output = await self._dfs("-checksum", path)
        return ChecksumRecord.parse(output)
