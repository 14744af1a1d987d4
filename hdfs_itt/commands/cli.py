import asyncio
import sys
from typing import Any, Callable, Coroutine

import click

from hdfs_itt.config import ITTConfig, load_env
from hdfs_itt.errors import ITTError
from hdfs_itt.lifecycle import LifecycleController
from hdfs_itt.logging import Logger, LoggingConfig, StreamType


FATAL_EXIT_CODE = 2


class CLIContext:
    def __init__(self, env_file: str | None, log_level: str | None) -> None:
        self.env_file = env_file
        self.log_level = log_level
        self.logger = Logger()

    def config(self) -> ITTConfig:
        config = ITTConfig.from_env(load_env(env_file=self.env_file))

        LoggingConfig().update(
            log_path=config.log_path,
            log_level=self.log_level or config.log_level,
            log_stream=StreamType.STDERR,
        )

        return config

    def controller(self) -> LifecycleController:
        return LifecycleController(self.config(), logger=self.logger)


def run_phase(
    context: CLIContext,
    phase: Callable[[LifecycleController], Coroutine[Any, Any, Any]],
):
    async def run():
        try:
            return await phase(context.controller())

        finally:
            await context.logger.close()

    try:
        return asyncio.run(run())

    except ITTError as err:
        click.echo(str(err), err=True)
        sys.exit(FATAL_EXIT_CODE)


@click.group(help="WebHDFS integration test tool.")
@click.option(
    "--env-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Settings file read after the environment (default: itt.env).",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["trace", "debug", "info", "warn", "error", "fatal"]),
)
@click.pass_context
def cli(ctx: click.Context, env_file: str | None, log_level: str | None):
    ctx.obj = CLIContext(env_file, log_level)
