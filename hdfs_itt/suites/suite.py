from .suite_runtime import SuiteRuntime


class Suite:
    """
    One test exercised by the client under test. Every lifecycle phase
    calls the matching hook on each registered suite, in order. Hooks
    default to doing nothing.
    """

    name: str = "suite"

    async def prepare_all(self, runtime: SuiteRuntime) -> None:
        pass

    async def prepare_cluster(self, runtime: SuiteRuntime) -> None:
        pass

    async def create_test_input(self, runtime: SuiteRuntime) -> None:
        pass

    async def validate(self, runtime: SuiteRuntime) -> None:
        pass

    async def cleanup_test_output(self, runtime: SuiteRuntime) -> None:
        pass

    async def cleanup(self, runtime: SuiteRuntime) -> None:
        pass
