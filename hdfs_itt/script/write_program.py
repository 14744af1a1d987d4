from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from hdfs_itt.errors import EmptyOrMalformedProgram, UnsortedSplitPoints

from .size_token import parse_size_token, resolve


@dataclass(slots=True, frozen=True)
class Chunk:
    index: int
    start: int
    end: int
    output_path: str

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(slots=True)
class CompiledWriteProgram:
    total_size: int
    boundaries: list[int] = field(default_factory=list)
    chunks: list[Chunk] = field(default_factory=list)

    @property
    def output_paths(self) -> list[str]:
        return [chunk.output_path for chunk in self.chunks]


def parse_write_program(program: str | list[str]) -> list[str]:
    points = program.split() if isinstance(program, str) else list(program)

    if len(points) < 1:
        raise EmptyOrMalformedProgram("write program is empty")

    for point in points:
        parse_size_token(point)

    return points


def compile_write_program(
    split_points: list[str],
    total_size: int,
    output_prefix: str | pathlib.Path = "wseg-",
) -> CompiledWriteProgram:
    """
    Resolve split start points and close the sequence at ``total_size``.

    ``["0", "10%", "50%", "70%"]`` over a 1000 byte file yields boundaries
    ``[0, 100, 500, 700, 1000]`` and four chunks.
    """
    if len(split_points) < 1:
        raise EmptyOrMalformedProgram("write program is empty")

    boundaries = [resolve(point, total_size) for point in split_points]
    boundaries.append(total_size)

    if boundaries[0] != 0:
        raise UnsortedSplitPoints(boundaries, "first split point must be 0")

    for previous, current in zip(boundaries, boundaries[1:]):
        if current < previous:
            raise UnsortedSplitPoints(
                boundaries,
                f"{current} follows {previous}",
            )

    return CompiledWriteProgram(
        total_size=total_size,
        boundaries=boundaries,
        chunks=[
            Chunk(
                index=index,
                start=start,
                end=end,
                output_path=f"{output_prefix}{index}",
            )
            for index, (start, end) in enumerate(zip(boundaries, boundaries[1:]))
        ],
    )
