from .exchange_record import ExchangeRecord as ExchangeRecord
from .read_program import (
    CompiledInstruction as CompiledInstruction,
    CompiledReadProgram as CompiledReadProgram,
    InstructionKind as InstructionKind,
    ReadInstruction as ReadInstruction,
    compile_read_program as compile_read_program,
    parse_read_program as parse_read_program,
)
from .size_token import resolve as resolve
from .write_program import (
    Chunk as Chunk,
    CompiledWriteProgram as CompiledWriteProgram,
    compile_write_program as compile_write_program,
    parse_write_program as parse_write_program,
)
