import asyncio
import pathlib

from hdfs_itt.script.write_program import CompiledWriteProgram

from .digest import READ_BLOCK_SIZE


def _materialize_chunks(
    reference_file: str,
    program: CompiledWriteProgram,
) -> list[str]:
    paths: list[str] = []

    with open(reference_file, "rb") as reference:
        for chunk in program.chunks:
            reference.seek(chunk.start)
            remaining = chunk.length

            with open(chunk.output_path, "wb") as chunk_file:
                while remaining > 0:
                    block = reference.read(min(READ_BLOCK_SIZE, remaining))
                    if not block:
                        break

                    chunk_file.write(block)
                    remaining -= len(block)

            paths.append(chunk.output_path)

    return paths


async def materialize_chunks(
    reference_file: str | pathlib.Path,
    program: CompiledWriteProgram,
) -> list[str]:
    """
    Split the reference file into one file per write chunk, in split point
    order. Empty chunks are written as empty files.
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None,
        _materialize_chunks,
        str(reference_file),
        program,
    )
