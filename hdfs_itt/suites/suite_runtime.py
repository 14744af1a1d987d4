from dataclasses import dataclass, field

from hdfs_itt.cluster import CommandRunner, HdfsShell, Provisioner
from hdfs_itt.config import ITTConfig
from hdfs_itt.logging import Logger


@dataclass(slots=True)
class SuiteRuntime:
    config: ITTConfig
    provisioner: Provisioner
    runner: CommandRunner
    hdfs: HdfsShell
    logger: Logger = field(default_factory=Logger)
