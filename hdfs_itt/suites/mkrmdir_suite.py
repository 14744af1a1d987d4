import asyncio

from hdfs_itt.script import ExchangeRecord

from .suite import Suite
from .suite_runtime import SuiteRuntime


DIRECTORY_TO_MAKE = "mkrmdirtest-dir-to-make"
DIRECTORY_TO_REMOVE = "mkrmdirtest-dir-to-remove"
DIRECTORY_TO_MAKE_FILE = "dir-to-make"
DIRECTORY_TO_REMOVE_FILE = "dir-to-remove"


class MkRmDirSuite(Suite):
    """
    The client under test creates one directory and removes another that
    is put in place before every run.
    """

    name = "mkrmdirtest"

    def _paths(self, runtime: SuiteRuntime) -> tuple[str, str]:
        hdfs_directory = runtime.config.hdfs_directory
        return (
            f"{hdfs_directory}/{DIRECTORY_TO_MAKE}",
            f"{hdfs_directory}/{DIRECTORY_TO_REMOVE}",
        )

    async def prepare_all(self, runtime: SuiteRuntime) -> None:
        directory_to_make, directory_to_remove = self._paths(runtime)
        working_directory = runtime.config.working_directory

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            (working_directory / DIRECTORY_TO_MAKE_FILE).write_text,
            directory_to_make,
        )
        await loop.run_in_executor(
            None,
            (working_directory / DIRECTORY_TO_REMOVE_FILE).write_text,
            directory_to_remove,
        )

    async def create_test_input(self, runtime: SuiteRuntime) -> None:
        _, directory_to_remove = self._paths(runtime)
        await runtime.hdfs.mkdir(directory_to_remove, parents=True)

    async def cleanup_test_output(self, runtime: SuiteRuntime) -> None:
        await runtime.hdfs.remove(*self._paths(runtime), recursive=True)

    async def cleanup(self, runtime: SuiteRuntime) -> None:
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            ExchangeRecord.remove,
            runtime.config.working_directory,
            (DIRECTORY_TO_MAKE_FILE, DIRECTORY_TO_REMOVE_FILE),
        )
