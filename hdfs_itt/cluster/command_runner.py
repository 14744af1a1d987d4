import asyncio
import pathlib
import subprocess

from hdfs_itt.errors import ExternalCommandFailed
from hdfs_itt.logging import Entry, Logger, LogLevel


class CommandRunner:
    """
    Runs external commands one at a time and waits for each to finish.

    Non-zero exit statuses raise ``ExternalCommandFailed``; nothing is
    retried.
    """

    def __init__(
        self,
        logger: Logger | None = None,
        log_path: str | None = None,
    ) -> None:
        self._logger = logger or Logger()
        self._log_path = log_path

    async def run(
        self,
        command: list[str],
        cwd: str | pathlib.Path | None = None,
        capture: bool = True,
        check: bool = True,
    ) -> str:
        async with self._logger.context(
            name="command_runner",
            path=self._log_path,
        ) as ctx:
            await ctx.log(
                Entry(
                    message=f"Running {' '.join(command)}",
                    level=LogLevel.DEBUG,
                )
            )

            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.PIPE if capture else None,
            )

            stdout, stderr = await process.communicate()

            output = stdout.decode() if stdout else ""
            errors = stderr.decode() if stderr else ""

            if check and process.returncode != 0:
                await ctx.log(
                    Entry(
                        message=f"Command {' '.join(command)} exited with status {process.returncode}",
                        level=LogLevel.ERROR,
                    )
                )

                raise ExternalCommandFailed(
                    command,
                    process.returncode,
                    stderr=errors,
                )

            return output

    async def run_shell(
        self,
        command: str,
        cwd: str | pathlib.Path | None = None,
    ) -> None:
        await self.run(
            ["/bin/sh", "-c", command],
            cwd=cwd,
            capture=False,
        )
