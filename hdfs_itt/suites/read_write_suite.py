import asyncio
import glob
import os
import pathlib

from hdfs_itt.cluster import ChecksumRecord
from hdfs_itt.digest import Manifest, build_manifest, materialize_chunks
from hdfs_itt.errors import (
    NotPrepared,
    ReadVerificationFailed,
    WriteVerificationFailed,
)
from hdfs_itt.script import (
    ExchangeRecord,
    compile_read_program,
    compile_write_program,
    parse_read_program,
    parse_write_program,
)
from hdfs_itt.script.exchange_record import PROGRAM_FILES
from hdfs_itt.source import ReferenceSource
from hdfs_itt.validation import ReadValidator, WriteValidator

from .suite import Suite
from .suite_runtime import SuiteRuntime


MANIFEST_FILE = "shasums"
BASELINE_FILE = "hdfs-checksum"
SEGMENT_PREFIX = "seg-"
WRITE_SEGMENT_PREFIX = "wseg-"


class ReadWriteSuite(Suite):
    """
    Reads byte ranges of the uploaded reference file and writes it back in
    chunks. Reads are checked against local SHA-512 digests, the written
    file against the HDFS checksum of the original upload.
    """

    name = "rwtest"

    async def prepare_all(self, runtime: SuiteRuntime) -> None:
        config = runtime.config
        working_directory = config.working_directory
        loop = asyncio.get_event_loop()

        source = ReferenceSource(config, runtime.runner, logger=runtime.logger)
        reference_path = await source.materialize()
        size = await loop.run_in_executor(None, os.path.getsize, reference_path)

        read_program = compile_read_program(
            parse_read_program(config.read_script),
            size,
            output_prefix=working_directory / SEGMENT_PREFIX,
        )
        write_program = compile_write_program(
            parse_write_program(config.write_script),
            size,
            output_prefix=working_directory / WRITE_SEGMENT_PREFIX,
        )

        manifest = await build_manifest(reference_path, read_program)
        await loop.run_in_executor(
            None,
            manifest.save,
            working_directory / MANIFEST_FILE,
        )

        await materialize_chunks(reference_path, write_program)

        record = ExchangeRecord(
            source_path=config.hdfs_source_path,
            target_path=config.hdfs_target_path,
            file_size=size,
            read_program=read_program.to_tokens(),
            write_program=write_program.output_paths,
        )
        await loop.run_in_executor(
            None,
            record.save_program_fields,
            working_directory,
        )

        await self._upload(runtime)
        await source.release()

    async def prepare_cluster(self, runtime: SuiteRuntime) -> None:
        source = ReferenceSource(
            runtime.config,
            runtime.runner,
            logger=runtime.logger,
        )

        await source.materialize()
        await self._upload(runtime)
        await source.release()

    async def _upload(self, runtime: SuiteRuntime) -> None:
        config = runtime.config

        await runtime.hdfs.mkdir(config.hdfs_directory, parents=True)
        await runtime.hdfs.put(config.container_source_path, config.hdfs_directory)
        baseline = await runtime.hdfs.checksum(config.hdfs_source_path)

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            (config.working_directory / BASELINE_FILE).write_text,
            f"{baseline}\n",
        )

    async def create_test_input(self, runtime: SuiteRuntime) -> None:
        await runtime.hdfs.remove(runtime.config.hdfs_target_path)

    async def validate(self, runtime: SuiteRuntime) -> None:
        config = runtime.config
        loop = asyncio.get_event_loop()

        manifest_path = config.working_directory / MANIFEST_FILE
        baseline_path = config.working_directory / BASELINE_FILE
        for path in (manifest_path, baseline_path):
            if not await loop.run_in_executor(None, path.is_file):
                raise NotPrepared(str(path))

        manifest = await loop.run_in_executor(None, Manifest.load, manifest_path)
        baseline_record = await loop.run_in_executor(None, baseline_path.read_text)

        read_validator = ReadValidator(
            logger=runtime.logger,
            log_path=config.log_path,
        )
        write_validator = WriteValidator(
            runtime.hdfs,
            logger=runtime.logger,
            log_path=config.log_path,
        )

        read_failure: ReadVerificationFailed | None = None
        try:
            await read_validator.validate(manifest)

        except ReadVerificationFailed as err:
            read_failure = err

        try:
            await write_validator.validate(
                config.hdfs_target_path,
                ChecksumRecord.parse(baseline_record),
            )

        except WriteVerificationFailed:
            if read_failure is None:
                raise

        if read_failure is not None:
            raise read_failure

    async def cleanup_test_output(self, runtime: SuiteRuntime) -> None:
        await runtime.hdfs.remove(runtime.config.hdfs_target_path)

    async def cleanup(self, runtime: SuiteRuntime) -> None:
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(
            None,
            self._remove_local_files,
            runtime.config.working_directory,
        )

        await runtime.hdfs.remove(runtime.config.hdfs_source_path)

    def _remove_local_files(self, working_directory: pathlib.Path):
        ExchangeRecord.remove(
            working_directory,
            (MANIFEST_FILE, BASELINE_FILE, *PROGRAM_FILES),
        )

        for prefix in (SEGMENT_PREFIX, WRITE_SEGMENT_PREFIX):
            for path in glob.glob(f"{glob.escape(str(working_directory / prefix))}*"):
                os.remove(path)
