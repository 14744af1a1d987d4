from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from enum import Enum

from hdfs_itt.errors import EmptyOrMalformedProgram, ReadPastEndOfFile

from .size_token import parse_size_token, resolve


class InstructionKind(Enum):
    SEEK = "s"
    READ = "r"


@dataclass(slots=True, frozen=True)
class ReadInstruction:
    kind: InstructionKind
    token: str

    @classmethod
    def seek(cls, token: str) -> ReadInstruction:
        return cls(kind=InstructionKind.SEEK, token=token)

    @classmethod
    def read(cls, token: str) -> ReadInstruction:
        return cls(kind=InstructionKind.READ, token=token)


@dataclass(slots=True, frozen=True)
class CompiledInstruction:
    kind: InstructionKind
    value: int
    offset: int
    output_path: str | None = None

    def to_token(self) -> str:
        if self.kind == InstructionKind.SEEK:
            return f"s:{self.value}"

        return f"r:{self.value}:{self.output_path}"


@dataclass(slots=True)
class CompiledReadProgram:
    total_size: int
    instructions: list[CompiledInstruction] = field(default_factory=list)

    @property
    def reads(self) -> list[CompiledInstruction]:
        return [
            instruction
            for instruction in self.instructions
            if instruction.kind == InstructionKind.READ
        ]

    @property
    def output_paths(self) -> list[str]:
        return [instruction.output_path for instruction in self.reads]

    def to_tokens(self) -> list[str]:
        return [instruction.to_token() for instruction in self.instructions]


def parse_read_program(program: str | list[str]) -> list[ReadInstruction]:
    """
    Tokenize a read program such as ``"r:128m s:0 r:1m r:128m"``.

    Size tokens are validated here so a malformed program fails before
    anything touches the reference file or the cluster.
    """
    items = program.split() if isinstance(program, str) else list(program)

    if len(items) < 1:
        raise EmptyOrMalformedProgram("read program is empty")

    instructions: list[ReadInstruction] = []
    for item in items:
        prefix, separator, token = item.partition(":")
        if separator != ":" or prefix not in ("s", "r"):
            raise EmptyOrMalformedProgram("expected s:<size> or r:<size>", item=item)

        parse_size_token(token)
        instructions.append(
            ReadInstruction(
                kind=InstructionKind(prefix),
                token=token,
            )
        )

    return instructions


def compile_read_program(
    instructions: list[ReadInstruction],
    total_size: int,
    output_prefix: str | pathlib.Path = "seg-",
) -> CompiledReadProgram:
    if len(instructions) < 1:
        raise EmptyOrMalformedProgram("read program is empty")

    compiled = CompiledReadProgram(total_size=total_size)
    position = 0
    sequence = 0

    for instruction in instructions:
        if not isinstance(instruction, ReadInstruction):
            raise EmptyOrMalformedProgram(
                "expected Seek or Read",
                item=repr(instruction),
            )

        value = resolve(instruction.token, total_size)

        if instruction.kind == InstructionKind.SEEK:
            compiled.instructions.append(
                CompiledInstruction(
                    kind=InstructionKind.SEEK,
                    value=value,
                    offset=value,
                )
            )
            position = value
            continue

        if position + value > total_size:
            raise ReadPastEndOfFile(position, value, total_size)

        compiled.instructions.append(
            CompiledInstruction(
                kind=InstructionKind.READ,
                value=value,
                offset=position,
                output_path=f"{output_prefix}{sequence}",
            )
        )

        sequence += 1
        position += value

    return compiled
