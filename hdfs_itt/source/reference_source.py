import asyncio
import os
import pathlib
import shlex

from hdfs_itt.cluster import CommandRunner
from hdfs_itt.config import ITTConfig
from hdfs_itt.errors import ExternalCommandFailed, SourceUnavailable
from hdfs_itt.logging import Entry, Logger, LogLevel


class ReferenceSource:
    """
    Materializes the reference file in the working directory.

    A file already present is reused and never discarded. A file this
    source had to fetch is removed again by ``release``.
    """

    def __init__(
        self,
        config: ITTConfig,
        runner: CommandRunner,
        logger: Logger | None = None,
    ) -> None:
        self._config = config
        self._runner = runner
        self._logger = logger or Logger()
        self.downloaded = False

    @property
    def path(self) -> pathlib.Path:
        return self._config.source_path

    def acquisition_command(self) -> str:
        if self._config.create_source_command:
            return self._config.create_source_command

        archive = shlex.quote(f"{self._config.testfile}.gz")
        url = shlex.quote(f"{self._config.source_url.rstrip('/')}/{self._config.testfile}.gz")
        return f"curl --fail --output {archive} {url} && gzip -d {archive}"

    async def materialize(self) -> pathlib.Path:
        loop = asyncio.get_event_loop()

        if await loop.run_in_executor(None, self.path.is_file):
            return self.path

        async with self._logger.context(
            name="reference_source",
            path=self._config.log_path,
        ) as ctx:
            command = self.acquisition_command()
            await ctx.log(
                Entry(
                    message=f"Materializing {self.path} with '{command}'",
                    level=LogLevel.INFO,
                )
            )

            self.downloaded = True

            try:
                await self._runner.run_shell(
                    command,
                    cwd=self._config.working_directory,
                )

            except ExternalCommandFailed as err:
                raise SourceUnavailable(str(self.path)) from err

        if not await loop.run_in_executor(None, self.path.is_file):
            raise SourceUnavailable(str(self.path))

        return self.path

    async def release(self) -> None:
        if not self.downloaded:
            return

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self._remove)
        self.downloaded = False

    def _remove(self):
        if os.path.exists(self.path):
            os.remove(self.path)
