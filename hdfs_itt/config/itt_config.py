from __future__ import annotations

import pathlib

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)

from hdfs_itt.errors import ConfigurationError
from hdfs_itt.logging import LogLevelName

from .env import Env


DEFAULT_NODE_COUNTS = {
    "vagrant": 1,
    "docker": 3,
}

HADOOP_USERS = {
    "vagrant": "vagrant",
    "docker": "root",
}


class ITTConfig(BaseModel):
    """
    Immutable settings for one test run, built once at start-up and
    passed to every component.
    """

    model_config = ConfigDict(frozen=True)

    testfile: StrictStr
    source_url: StrictStr
    create_source_command: StrictStr | None = None
    read_script: StrictStr
    write_script: StrictStr
    provisioner: StrictStr
    testdata_directory: StrictStr
    container_testdata_directory: StrictStr
    hdfs_directory: StrictStr
    bigtop_root: StrictStr
    coordinator_port: StrictInt
    data_port: StrictInt
    node_count: StrictInt
    hadoop_user: StrictStr
    local_host: StrictStr
    vagrant_coordinator_host_port: StrictInt
    vagrant_data_host_port_base: StrictInt
    vagrant_data_host_port_stride: StrictInt
    sut_command: StrictStr
    sut_directory: StrictStr
    log_level: LogLevelName
    log_path: StrictStr | None = None
    enable_mkrmdir_test: StrictBool = True

    @classmethod
    def from_env(cls, env: Env) -> ITTConfig:
        provisioner = env.ITT_PROVISIONER
        if provisioner not in DEFAULT_NODE_COUNTS:
            raise ConfigurationError(
                "Invalid PROVISIONER setting",
                provisioner=provisioner,
            )

        node_count = env.ITT_N_C
        if node_count is None:
            node_count = DEFAULT_NODE_COUNTS[provisioner]

        if node_count < 1:
            raise ConfigurationError(
                "Cluster requires at least one node",
                node_count=node_count,
            )

        hadoop_user = HADOOP_USERS[provisioner]

        hdfs_directory = env.ITT_HDFS_DIR
        if hdfs_directory is None:
            hdfs_directory = f"/user/{hadoop_user}/test-data"

        try:
            return cls(
                testfile=env.ITT_TESTFILE,
                source_url=env.ITT_SOURCE_URL,
                create_source_command=env.ITT_CREATE_SOURCE_COMMAND,
                read_script=env.ITT_READ_SCRIPT,
                write_script=env.ITT_WRITE_SCRIPT,
                provisioner=provisioner,
                testdata_directory=env.ITT_TESTDATA_DIR,
                container_testdata_directory=env.ITT_C_TESTDATA_DIR,
                hdfs_directory=hdfs_directory.rstrip("/"),
                bigtop_root=env.ITT_BIGTOP_ROOT,
                coordinator_port=env.ITT_C_WEBHDFS_NN_PORT,
                data_port=env.ITT_C_WEBHDFS_DN_PORT,
                node_count=node_count,
                hadoop_user=hadoop_user,
                local_host=env.ITT_LOCALHOST,
                vagrant_coordinator_host_port=env.ITT_VAGRANT_NN_HOST_PORT,
                vagrant_data_host_port_base=env.ITT_VAGRANT_DN_HOST_PORT_BASE,
                vagrant_data_host_port_stride=env.ITT_VAGRANT_DN_HOST_PORT_STRIDE,
                sut_command=env.ITT_SUT_COMMAND,
                sut_directory=env.ITT_SUT_DIRECTORY,
                log_level=env.ITT_LOG_LEVEL,
                log_path=env.ITT_LOG_PATH,
                enable_mkrmdir_test=env.ITT_ENABLE_MKRMDIR_TEST,
            )

        except ValidationError as err:
            raise ConfigurationError(
                "Invalid configuration",
                error=str(err),
            ) from err

    @property
    def working_directory(self) -> pathlib.Path:
        return pathlib.Path(self.testdata_directory)

    @property
    def source_path(self) -> pathlib.Path:
        return self.working_directory / self.testfile

    @property
    def container_source_path(self) -> str:
        return f"{self.container_testdata_directory.rstrip('/')}/{self.testfile}"

    @property
    def hdfs_source_path(self) -> str:
        return f"{self.hdfs_directory}/{self.testfile}"

    @property
    def hdfs_target_path(self) -> str:
        return f"{self.hdfs_directory}/{self.testfile}.w"
