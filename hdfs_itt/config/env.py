from __future__ import annotations

from typing import Callable, Dict, Union

from pydantic import BaseModel, StrictBool, StrictInt, StrictStr

from hdfs_itt.logging import LogLevelName

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    ITT_TESTFILE: StrictStr = "soc-pokec-relationships.txt"
    ITT_SOURCE_URL: StrictStr = "https://snap.stanford.edu/data"
    ITT_CREATE_SOURCE_COMMAND: StrictStr | None = None
    ITT_READ_SCRIPT: StrictStr = "r:128m s:0 r:1m r:128m"
    ITT_WRITE_SCRIPT: StrictStr = "0 10% 50% 70%"
    ITT_PROVISIONER: StrictStr = "vagrant"
    ITT_TESTDATA_DIR: StrictStr = "./test-data"
    ITT_C_TESTDATA_DIR: StrictStr = "/test-data"
    ITT_HDFS_DIR: StrictStr | None = None
    ITT_BIGTOP_ROOT: StrictStr = "/usr/local/src/bigtop"
    ITT_C_WEBHDFS_NN_PORT: StrictInt = 50070
    ITT_C_WEBHDFS_DN_PORT: StrictInt = 50075
    ITT_N_C: StrictInt | None = None
    ITT_LOCALHOST: StrictStr = "localhost"
    ITT_VAGRANT_NN_HOST_PORT: StrictInt = 51070
    ITT_VAGRANT_DN_HOST_PORT_BASE: StrictInt = 50075
    ITT_VAGRANT_DN_HOST_PORT_STRIDE: StrictInt = 1000
    ITT_SUT_COMMAND: StrictStr = "cargo test --test it -- --nocapture"
    ITT_SUT_DIRECTORY: StrictStr = "."
    ITT_LOG_LEVEL: LogLevelName = "info"
    ITT_LOG_PATH: StrictStr | None = None
    ITT_ENABLE_MKRMDIR_TEST: StrictBool = True

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "ITT_TESTFILE": str,
            "ITT_SOURCE_URL": str,
            "ITT_CREATE_SOURCE_COMMAND": str,
            "ITT_READ_SCRIPT": str,
            "ITT_WRITE_SCRIPT": str,
            "ITT_PROVISIONER": str,
            "ITT_TESTDATA_DIR": str,
            "ITT_C_TESTDATA_DIR": str,
            "ITT_HDFS_DIR": str,
            "ITT_BIGTOP_ROOT": str,
            "ITT_C_WEBHDFS_NN_PORT": int,
            "ITT_C_WEBHDFS_DN_PORT": int,
            "ITT_N_C": int,
            "ITT_LOCALHOST": str,
            "ITT_VAGRANT_NN_HOST_PORT": int,
            "ITT_VAGRANT_DN_HOST_PORT_BASE": int,
            "ITT_VAGRANT_DN_HOST_PORT_STRIDE": int,
            "ITT_SUT_COMMAND": str,
            "ITT_SUT_DIRECTORY": str,
            "ITT_LOG_LEVEL": to_log_level_name,
            "ITT_LOG_PATH": str,
            "ITT_ENABLE_MKRMDIR_TEST": to_bool,
        }


def to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def to_log_level_name(value: str) -> str:
    return value.strip().lower()
