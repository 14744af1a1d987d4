from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from hdfs_itt.cluster.nat_map import EntryPoint, NatMap
from hdfs_itt.errors import MalformedRecord


ENTRYPOINT_FILE = "entrypoint"
NATMAP_FILE = "natmap"
USER_FILE = "user"
READ_PROGRAM_FILE = "readscript"
WRITE_PROGRAM_FILE = "writescript"
SOURCE_PATH_FILE = "source"
TARGET_PATH_FILE = "target"
SIZE_FILE = "size"

CLUSTER_FILES = (ENTRYPOINT_FILE, NATMAP_FILE, USER_FILE)
PROGRAM_FILES = (
    READ_PROGRAM_FILE,
    WRITE_PROGRAM_FILE,
    SOURCE_PATH_FILE,
    TARGET_PATH_FILE,
    SIZE_FILE,
)


@dataclass(slots=True)
class ExchangeRecord:
    """
    Everything the system under test reads from the working directory.

    Each field lives in its own file so the client under test can parse
    them independently. Program fields are space-joined tokens in program
    order, the NAT map is one ``internal-host:port=host:port`` per line.
    """

    entry_point: EntryPoint | None = None
    nat_map: NatMap = field(default_factory=NatMap)
    user_identity: str | None = None
    source_path: str | None = None
    target_path: str | None = None
    file_size: int | None = None
    read_program: list[str] = field(default_factory=list)
    write_program: list[str] = field(default_factory=list)

    def save_cluster_fields(self, directory: str | pathlib.Path) -> None:
        directory = pathlib.Path(directory)
        (directory / USER_FILE).write_text(self.user_identity or "")
        (directory / NATMAP_FILE).write_text(
            "".join(f"{line}\n" for line in self.nat_map.to_lines())
        )
        (directory / ENTRYPOINT_FILE).write_text(str(self.entry_point))

    def save_program_fields(self, directory: str | pathlib.Path) -> None:
        directory = pathlib.Path(directory)
        (directory / READ_PROGRAM_FILE).write_text(" ".join(self.read_program))
        (directory / WRITE_PROGRAM_FILE).write_text(" ".join(self.write_program))
        (directory / SOURCE_PATH_FILE).write_text(self.source_path or "")
        (directory / TARGET_PATH_FILE).write_text(self.target_path or "")
        (directory / SIZE_FILE).write_text(str(self.file_size))

    def save(self, directory: str | pathlib.Path) -> None:
        self.save_cluster_fields(directory)
        self.save_program_fields(directory)

    @classmethod
    def load(cls, directory: str | pathlib.Path) -> ExchangeRecord:
        directory = pathlib.Path(directory)

        def read_field(name: str) -> str | None:
            path = directory / name
            if not path.exists():
                return None

            return path.read_text()

        entry_point = read_field(ENTRYPOINT_FILE)
        nat_map = read_field(NATMAP_FILE)
        size = read_field(SIZE_FILE)
        if size and not size.strip().isdigit():
            raise MalformedRecord("file size", size)

        return cls(
            entry_point=EntryPoint.parse(entry_point) if entry_point else None,
            nat_map=NatMap.from_lines(nat_map.splitlines()) if nat_map else NatMap(),
            user_identity=read_field(USER_FILE),
            source_path=read_field(SOURCE_PATH_FILE),
            target_path=read_field(TARGET_PATH_FILE),
            file_size=int(size) if size else None,
            read_program=(read_field(READ_PROGRAM_FILE) or "").split(),
            write_program=(read_field(WRITE_PROGRAM_FILE) or "").split(),
        )

    @staticmethod
    def remove(directory: str | pathlib.Path, names: tuple[str, ...]) -> None:
        directory = pathlib.Path(directory)
        for name in names:
            (directory / name).unlink(missing_ok=True)
