import pytest

from hdfs_itt.errors import EmptyOrMalformedProgram, MalformedToken, ReadPastEndOfFile
from hdfs_itt.script import (
    InstructionKind,
    ReadInstruction,
    compile_read_program,
    parse_read_program,
)


MEGABYTE = 1024 * 1024
REFERENCE_SIZE = 423941508


class TestParseReadProgram:
    def test_parses_seek_and_read(self):
        instructions = parse_read_program("r:128m s:0 r:1m r:128m")

        assert instructions == [
            ReadInstruction.read("128m"),
            ReadInstruction.seek("0"),
            ReadInstruction.read("1m"),
            ReadInstruction.read("128m"),
        ]

    def test_accepts_token_list(self):
        assert parse_read_program(["s:10%", "r:1k"]) == [
            ReadInstruction.seek("10%"),
            ReadInstruction.read("1k"),
        ]

    @pytest.mark.parametrize("program", ["", "   "])
    def test_rejects_empty_program(self, program: str):
        with pytest.raises(EmptyOrMalformedProgram):
            parse_read_program(program)

    @pytest.mark.parametrize("item", ["x:10", "r10", "read:10", ":10"])
    def test_rejects_unknown_instruction(self, item: str):
        with pytest.raises(EmptyOrMalformedProgram) as error:
            parse_read_program(f"r:1 {item}")

        assert error.value.item == item

    def test_rejects_malformed_size(self):
        with pytest.raises(MalformedToken):
            parse_read_program("r:1 s:lots")


class TestCompileReadProgram:
    def test_reference_scenario(self):
        compiled = compile_read_program(
            parse_read_program("r:128m s:0 r:1m r:128m"),
            REFERENCE_SIZE,
            output_prefix="test-data/seg-",
        )

        assert [
            (read.offset, read.offset + read.value) for read in compiled.reads
        ] == [
            (0, 128 * MEGABYTE),
            (0, MEGABYTE),
            (MEGABYTE, 129 * MEGABYTE),
        ]
        assert compiled.output_paths == [
            "test-data/seg-0",
            "test-data/seg-1",
            "test-data/seg-2",
        ]

    def test_tokens_carry_resolved_values_and_slots(self):
        compiled = compile_read_program(
            parse_read_program("r:128m s:0 r:1m r:128m"),
            REFERENCE_SIZE,
            output_prefix="seg-",
        )

        assert compiled.to_tokens() == [
            f"r:{128 * MEGABYTE}:seg-0",
            "s:0",
            f"r:{MEGABYTE}:seg-1",
            f"r:{128 * MEGABYTE}:seg-2",
        ]

    def test_seek_resets_cursor(self):
        compiled = compile_read_program(
            parse_read_program("r:10 s:50% r:10 s:5 r:1"),
            200,
        )

        assert [read.offset for read in compiled.reads] == [0, 100, 5]
        assert compiled.instructions[1].kind == InstructionKind.SEEK
        assert compiled.instructions[1].value == 100

    def test_read_ending_at_end_of_file_is_allowed(self):
        compiled = compile_read_program(parse_read_program("s:90 r:10"), 100)

        assert compiled.reads[0].offset == 90

    def test_read_past_end_of_file_fails(self):
        with pytest.raises(ReadPastEndOfFile) as error:
            compile_read_program(parse_read_program("s:95 r:10"), 100)

        assert error.value.offset == 95
        assert error.value.length == 10
        assert error.value.size == 100

    def test_accumulated_reads_past_end_of_file_fail(self):
        with pytest.raises(ReadPastEndOfFile):
            compile_read_program(parse_read_program("r:60% r:60%"), 100)

    def test_seek_only_program_has_no_slots(self):
        compiled = compile_read_program(parse_read_program("s:0"), 100)

        assert compiled.reads == []

    def test_rejects_foreign_instruction(self):
        with pytest.raises(EmptyOrMalformedProgram):
            compile_read_program(["r:10"], 100)

    def test_rejects_empty_program(self):
        with pytest.raises(EmptyOrMalformedProgram):
            compile_read_program([], 100)
