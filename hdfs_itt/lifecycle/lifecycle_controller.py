import asyncio
import contextlib
import os
from typing import AsyncIterator

from hdfs_itt.cluster import (
    CommandRunner,
    HdfsShell,
    Provisioner,
    create_provisioner,
    resolve_topology,
)
from hdfs_itt.config import ITTConfig
from hdfs_itt.errors import LifecycleError
from hdfs_itt.logging import Logger, PhaseError, PhaseInfo, TopologyInfo
from hdfs_itt.script import ExchangeRecord
from hdfs_itt.script.exchange_record import CLUSTER_FILES
from hdfs_itt.suites import Suite, SuiteRuntime, build_default_suites

from .lifecycle_state import LifecycleState, can_transition
from .preparedness import (
    PreparationDecision,
    check_preparedness,
    create_marker,
    remove_marker,
)
from .run_state import RunState


class LifecycleController:
    """
    Drives one test run through prepare, create-test-input, execute,
    validate and cleanup against a single working directory.

    Phases run strictly one after another. A failing phase moves the run
    to ``FAILED`` and re-raises; nothing is rolled back, and cleanup has
    to be requested explicitly.
    """

    def __init__(
        self,
        config: ITTConfig,
        provisioner: Provisioner | None = None,
        runner: CommandRunner | None = None,
        suites: list[Suite] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or Logger()
        self._runner = runner or CommandRunner(
            logger=self._logger,
            log_path=config.log_path,
        )
        self._provisioner = provisioner or create_provisioner(config, self._runner)
        self._suites = suites if suites is not None else build_default_suites(config)
        self._runtime = SuiteRuntime(
            config=config,
            provisioner=self._provisioner,
            runner=self._runner,
            hdfs=HdfsShell(
                self._provisioner,
                logger=self._logger,
                log_path=config.log_path,
            ),
            logger=self._logger,
        )
        self._state = LifecycleState.UNINITIALIZED

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def provisioner(self) -> Provisioner:
        return self._provisioner

    @contextlib.asynccontextmanager
    async def _phase(
        self,
        phase: str,
        target: LifecycleState,
        persist: bool = True,
    ) -> AsyncIterator[None]:
        if not can_transition(self._state, target):
            raise LifecycleError(self._state.value, target.value)

        working_directory = str(self._config.working_directory)

        async with self._logger.context(
            name="lifecycle",
            path=self._config.log_path,
            nested=True,
        ) as ctx:
            await ctx.log(
                PhaseInfo(
                    message=f"Starting {phase}",
                    phase=phase,
                    working_directory=working_directory,
                )
            )

            try:
                yield

            except Exception as err:
                self._state = LifecycleState.FAILED
                await ctx.log(
                    PhaseError(
                        message=f"{phase} failed: {err}",
                        phase=phase,
                        working_directory=working_directory,
                        error_type=type(err).__name__,
                    )
                )

                await self._save_state(phase, error=str(err))
                raise

            self._state = target
            if persist:
                await self._save_state(phase)

            await ctx.log(
                PhaseInfo(
                    message=f"Completed {phase}",
                    phase=phase,
                    working_directory=working_directory,
                )
            )

    async def _save_state(self, phase: str, error: str | None = None):
        loop = asyncio.get_event_loop()
        if not await loop.run_in_executor(
            None,
            os.path.isdir,
            self._config.working_directory,
        ):
            return

        await loop.run_in_executor(
            None,
            RunState(
                state=self._state,
                phase=phase,
                error=error,
            ).save,
            self._config.working_directory,
        )

    async def _ensure_working_directory(self):
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            lambda: self._config.working_directory.mkdir(parents=True, exist_ok=True),
        )

    async def _write_cluster_config(self):
        topology = await resolve_topology(
            self._provisioner,
            self._config.node_count,
            self._config.coordinator_port,
            self._config.data_port,
        )

        async with self._logger.context(
            name="lifecycle",
            path=self._config.log_path,
            nested=True,
        ) as ctx:
            await ctx.log(
                TopologyInfo(
                    message=f"Resolved entry point {topology.entry_point}",
                    provisioner=self._provisioner.name,
                    node_count=self._config.node_count,
                    entry_point=str(topology.entry_point),
                )
            )

        record = ExchangeRecord(
            entry_point=topology.entry_point,
            nat_map=topology.nat_map,
            user_identity=self._config.hadoop_user,
        )

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            record.save_cluster_fields,
            self._config.working_directory,
        )

    async def prepare(self, force: bool = False) -> PreparationDecision:
        await self._ensure_working_directory()

        loop = asyncio.get_event_loop()
        decision = await loop.run_in_executor(
            None,
            check_preparedness,
            self._config.working_directory,
            force,
        )

        async with self._phase("prepare", LifecycleState.PREPARED):
            if decision.should_prepare:
                await self._write_cluster_config()

                for suite in self._suites:
                    await suite.prepare_all(self._runtime)

                await self._cleanup_test_output()

                await loop.run_in_executor(
                    None,
                    create_marker,
                    self._config.working_directory,
                )

        return decision

    async def prepare_cluster(self):
        await self._ensure_working_directory()

        async with self._phase("prepare-cluster-only", LifecycleState.PREPARED):
            await self._write_cluster_config()

            for suite in self._suites:
                await suite.prepare_cluster(self._runtime)

            await self._cleanup_test_output()

    async def create_test_input(self):
        async with self._phase("create-volatile-input", LifecycleState.INPUT_READY):
            for suite in self._suites:
                await suite.create_test_input(self._runtime)

    async def execute(self):
        async with self._phase("execute", LifecycleState.EXECUTED):
            await self._runner.run_shell(
                self._config.sut_command,
                cwd=self._config.sut_directory,
            )

    async def validate(self):
        async with self._phase("validate", LifecycleState.VALIDATED):
            for suite in self._suites:
                await suite.validate(self._runtime)

    async def _cleanup_test_output(self):
        for suite in self._suites:
            await suite.cleanup_test_output(self._runtime)

    async def cleanup_test_output(self):
        async with self._phase("cleanup-output", LifecycleState.CLEANED_UP):
            await self._cleanup_test_output()

    async def cleanup(self):
        async with self._phase("cleanup-all", LifecycleState.CLEANED_UP, persist=False):
            await self._cleanup_test_output()

            for suite in self._suites:
                await suite.cleanup(self._runtime)

            loop = asyncio.get_event_loop()
            await loop.run_in_executor(
                None,
                ExchangeRecord.remove,
                self._config.working_directory,
                CLUSTER_FILES,
            )
            await loop.run_in_executor(
                None,
                remove_marker,
                self._config.working_directory,
            )
            await loop.run_in_executor(
                None,
                RunState.remove,
                self._config.working_directory,
            )

    async def run(self):
        await self.prepare()
        await self.create_test_input()
        await self.execute()
        await self.validate()
        await self.cleanup_test_output()
