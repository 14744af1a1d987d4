from hdfs_itt.config import ITTConfig

from .mkrmdir_suite import MkRmDirSuite
from .read_write_suite import ReadWriteSuite
from .suite import Suite


def build_default_suites(config: ITTConfig) -> list[Suite]:
    suites: list[Suite] = [ReadWriteSuite()]

    if config.enable_mkrmdir_test:
        suites.append(MkRmDirSuite())

    return suites
