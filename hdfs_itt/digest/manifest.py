from __future__ import annotations

import asyncio
import os
import pathlib
from dataclasses import dataclass, field

from hdfs_itt.errors import MalformedRecord, ReadPastEndOfFile
from hdfs_itt.script.read_program import CompiledReadProgram, InstructionKind

from .digest import digest_range


@dataclass(slots=True, frozen=True)
class ManifestEntry:
    path: str
    digest: str


@dataclass(slots=True)
class Manifest:
    """
    Expected digest of every read the system under test performs, in
    program order. Stored in ``sha512sum`` format so it can also be
    checked by hand with ``sha512sum -c``.
    """

    entries: list[ManifestEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def append(self, path: str, digest: str) -> None:
        self.entries.append(ManifestEntry(path=path, digest=digest))

    def dumps(self) -> str:
        return "".join(f"{entry.digest}  {entry.path}\n" for entry in self.entries)

    @classmethod
    def loads(cls, data: str) -> Manifest:
        manifest = cls()
        for line in data.splitlines():
            if not line.strip():
                continue

            digest, separator, path = line.partition("  ")
            if not separator or not digest or not path:
                raise MalformedRecord(
                    "manifest line",
                    line,
                    reason="expected <digest>  <path>",
                )

            manifest.append(path, digest)

        return manifest

    def save(self, path: str | pathlib.Path) -> None:
        pathlib.Path(path).write_text(self.dumps())

    @classmethod
    def load(cls, path: str | pathlib.Path) -> Manifest:
        return cls.loads(pathlib.Path(path).read_text())


def _build_manifest(
    reference_file: str,
    program: CompiledReadProgram,
) -> Manifest:
    manifest = Manifest()
    size = os.path.getsize(reference_file)
    position = 0

    with open(reference_file, "rb") as reference:
        for instruction in program.instructions:
            if instruction.kind == InstructionKind.SEEK:
                position = instruction.value
                continue

            if position + instruction.value > size:
                raise ReadPastEndOfFile(position, instruction.value, size)

            manifest.append(
                instruction.output_path,
                digest_range(reference, position, instruction.value),
            )

            position += instruction.value

    return manifest


async def build_manifest(
    reference_file: str | pathlib.Path,
    program: CompiledReadProgram,
) -> Manifest:
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None,
        _build_manifest,
        str(reference_file),
        program,
    )
