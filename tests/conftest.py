"""
Pytest configuration shared by the unit tests.

Provides an in-memory stand-in for a provisioned HDFS cluster and a
simulated client under test, so the full lifecycle can be exercised
without VMs, containers or a network.
"""

import hashlib
import pathlib
import random
import shlex
from typing import Callable

import pytest

from hdfs_itt.cluster import CommandRunner, Provisioner
from hdfs_itt.config import Env, ITTConfig
from hdfs_itt.errors import ExternalCommandFailed
from hdfs_itt.logging import LoggingConfig
from hdfs_itt.script import ExchangeRecord


REFERENCE_SIZE = 300_000
CHECKSUM_ALGORITHM = "MD5-of-0MD5-of-512CRC32C"


class FakeHdfsProvisioner(Provisioner):
    """
    Provisioner whose cluster is a dict of HDFS paths to bytes. ``put``
    reads from the working directory the container path is mounted from.
    """

    name = "fake"

    def __init__(
        self,
        working_directory: pathlib.Path,
        container_directory: str = "/test-data",
        missing_ports: set[tuple[int, int]] | None = None,
    ) -> None:
        super().__init__(CommandRunner())
        self.working_directory = working_directory
        self.container_directory = container_directory.rstrip("/")
        self.missing_ports = missing_ports or set()
        self.files: dict[str, bytes] = {}
        self.directories: set[str] = set()
        self.commands: list[tuple[int, str]] = []
        self.lifecycle_calls: list[str] = []

    async def up(self) -> None:
        self.lifecycle_calls.append("up")

    async def down(self) -> None:
        self.lifecycle_calls.append("down")

    async def ssh(self) -> None:
        self.lifecycle_calls.append("ssh")

    async def hostname_of(self, ordinal: int) -> str:
        return f"bigtop{ordinal}.fake"

    async def host_address_of(self, ordinal: int, port: int) -> str | None:
        if (ordinal, port) in self.missing_ports:
            return None

        if port == 50070:
            return "localhost:32000"

        if port == 50075:
            return f"localhost:{33000 + ordinal}"

        return None

    def checksum_of(self, data: bytes) -> str:
        return hashlib.md5(data).hexdigest()

    def uploads(self) -> list[str]:
        return [
            command
            for _, command in self.commands
            if command.startswith("hdfs dfs -put")
        ]

    async def exec(self, ordinal: int, command: str) -> str:
        self.commands.append((ordinal, command))
        args = shlex.split(command)

        if args[:2] == ["hostname", "-f"]:
            return f"bigtop{ordinal}.fake\n"

        if args[:2] != ["hdfs", "dfs"]:
            raise ExternalCommandFailed(args, 127, stderr="command not found")

        operation, operands = args[2], args[3:]

        if operation == "-mkdir":
            parents = "-p" in operands
            paths = [operand for operand in operands if operand != "-p"]
            for path in paths:
                if path in self.directories and not parents:
                    raise ExternalCommandFailed(args, 1, stderr="File exists")

                self.directories.add(path)

            return ""

        if operation == "-put":
            local_path, remote_directory = operands[-2], operands[-1]
            relative = local_path.removeprefix(self.container_directory).lstrip("/")
            data = (self.working_directory / relative).read_bytes()
            self.files[f"{remote_directory}/{pathlib.PurePosixPath(local_path).name}"] = data
            return ""

        if operation == "-checksum":
            path = operands[0]
            if path not in self.files:
                raise ExternalCommandFailed(args, 1, stderr=f"{path}: No such file")

            return f"{path}\t{CHECKSUM_ALGORITHM}\t{self.checksum_of(self.files[path])}\n"

        if operation == "-rm":
            for path in operands:
                if path.startswith("-"):
                    continue

                self.files.pop(path, None)
                self.directories.discard(path)

            return ""

        raise ExternalCommandFailed(args, 1, stderr=f"Unknown operation {operation}")


def simulate_client(
    provisioner: FakeHdfsProvisioner,
    working_directory: pathlib.Path,
    corrupt_reads: set[int] | None = None,
    corrupt_write: bool = False,
) -> None:
    """
    Do what the client under test does: replay the read program against the
    uploaded file, write the chunks back to the target path and make and
    remove the mkdir/rmdir test directories.
    """
    corrupt_reads = corrupt_reads or set()
    record = ExchangeRecord.load(working_directory)
    source = provisioner.files[record.source_path]

    position = 0
    sequence = 0
    for token in record.read_program:
        kind, value, *output = token.split(":", 2)
        value = int(value)

        if kind == "s":
            position = value
            continue

        data = bytearray(source[position:position + value])
        if sequence in corrupt_reads and data:
            data[0] ^= 0xFF

        pathlib.Path(output[0]).write_bytes(bytes(data))
        position += value
        sequence += 1

    written = b"".join(
        pathlib.Path(chunk_path).read_bytes() for chunk_path in record.write_program
    )
    if corrupt_write:
        written = written[:-1] + bytes([written[-1] ^ 0xFF])

    provisioner.files[record.target_path] = written

    directory_to_make = (working_directory / "dir-to-make").read_text()
    directory_to_remove = (working_directory / "dir-to-remove").read_text()
    provisioner.directories.add(directory_to_make)
    provisioner.directories.discard(directory_to_remove)


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="error")
    yield
    config.update(log_level="info")


@pytest.fixture
def working_directory(tmp_path: pathlib.Path) -> pathlib.Path:
    directory = tmp_path / "test-data"
    directory.mkdir()
    return directory


@pytest.fixture
def reference_bytes() -> bytes:
    generator = random.Random(1564409836)
    return bytes(generator.getrandbits(8) for _ in range(REFERENCE_SIZE))


@pytest.fixture
def reference_file(working_directory: pathlib.Path, reference_bytes: bytes) -> pathlib.Path:
    path = working_directory / "reference.txt"
    path.write_bytes(reference_bytes)
    return path


@pytest.fixture
def config_factory(working_directory: pathlib.Path) -> Callable[..., ITTConfig]:
    def create_config(**overrides) -> ITTConfig:
        values = {
            "ITT_TESTFILE": "reference.txt",
            "ITT_READ_SCRIPT": "r:100k s:0 r:1k r:100k",
            "ITT_WRITE_SCRIPT": "0 10% 50% 70%",
            "ITT_PROVISIONER": "docker",
            "ITT_TESTDATA_DIR": str(working_directory),
            "ITT_C_TESTDATA_DIR": "/test-data",
            "ITT_SUT_COMMAND": "true",
            "ITT_LOG_LEVEL": "error",
        }
        values.update(overrides)
        return ITTConfig.from_env(Env(**values))

    return create_config


@pytest.fixture
def itt_config(config_factory) -> ITTConfig:
    return config_factory()


@pytest.fixture
def fake_provisioner(working_directory: pathlib.Path) -> FakeHdfsProvisioner:
    return FakeHdfsProvisioner(working_directory)


@pytest.fixture
def provisioner_factory(working_directory: pathlib.Path):
    def create_provisioner(**kwargs) -> FakeHdfsProvisioner:
        return FakeHdfsProvisioner(working_directory, **kwargs)

    return create_provisioner


@pytest.fixture
def client_simulator(fake_provisioner: FakeHdfsProvisioner, working_directory: pathlib.Path):
    def run_client(**kwargs) -> None:
        simulate_client(fake_provisioner, working_directory, **kwargs)

    return run_client
