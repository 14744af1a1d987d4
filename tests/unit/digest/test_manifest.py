import hashlib
import pathlib

import pytest

from hdfs_itt.digest import Manifest, build_manifest
from hdfs_itt.errors import MalformedRecord, ReadPastEndOfFile
from hdfs_itt.script import CompiledReadProgram, compile_read_program, parse_read_program
from hdfs_itt.script.read_program import CompiledInstruction, InstructionKind


class TestBuildManifest:
    @pytest.mark.asyncio
    async def test_digests_each_read_range(
        self,
        reference_file: pathlib.Path,
        reference_bytes: bytes,
        working_directory: pathlib.Path,
    ):
        program = compile_read_program(
            parse_read_program("r:100k s:0 r:1k r:100k"),
            len(reference_bytes),
            output_prefix=working_directory / "seg-",
        )

        manifest = await build_manifest(reference_file, program)

        expected = [
            reference_bytes[0:102400],
            reference_bytes[0:1024],
            reference_bytes[1024:103424],
        ]
        assert [entry.digest for entry in manifest] == [
            hashlib.sha512(data).hexdigest() for data in expected
        ]
        assert [entry.path for entry in manifest] == program.output_paths

    @pytest.mark.asyncio
    async def test_manifest_is_deterministic(
        self,
        reference_file: pathlib.Path,
        reference_bytes: bytes,
    ):
        program = compile_read_program(
            parse_read_program("s:10% r:20% r:1k s:0 r:0"),
            len(reference_bytes),
        )

        first = await build_manifest(reference_file, program)
        second = await build_manifest(reference_file, program)

        assert first.entries == second.entries

    @pytest.mark.asyncio
    async def test_zero_length_read(self, reference_file: pathlib.Path, reference_bytes: bytes):
        program = compile_read_program(parse_read_program("r:0"), len(reference_bytes))

        manifest = await build_manifest(reference_file, program)

        assert manifest.entries[0].digest == hashlib.sha512(b"").hexdigest()

    @pytest.mark.asyncio
    async def test_range_past_actual_file_fails(self, reference_file: pathlib.Path, reference_bytes: bytes):
        program = CompiledReadProgram(
            total_size=len(reference_bytes) + 10,
            instructions=[
                CompiledInstruction(
                    kind=InstructionKind.READ,
                    value=len(reference_bytes) + 10,
                    offset=0,
                    output_path="seg-0",
                )
            ],
        )

        with pytest.raises(ReadPastEndOfFile):
            await build_manifest(reference_file, program)


class TestManifestFormat:
    def test_uses_sha512sum_layout(self, working_directory: pathlib.Path):
        manifest = Manifest()
        manifest.append("test-data/seg-0", "ab" * 64)
        manifest.append("test-data/seg-1", "cd" * 64)

        manifest.save(working_directory / "shasums")

        assert (working_directory / "shasums").read_text() == (
            f"{'ab' * 64}  test-data/seg-0\n{'cd' * 64}  test-data/seg-1\n"
        )
        assert Manifest.load(working_directory / "shasums").entries == manifest.entries

    def test_rejects_malformed_lines(self):
        with pytest.raises(MalformedRecord):
            Manifest.loads(f"{'ab' * 64} test-data/seg-0\n")
