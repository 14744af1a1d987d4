import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from typing import Callable, Dict, TypeVar

import msgspec

from hdfs_itt.logging.config import LoggingConfig, StreamType
from hdfs_itt.logging.models import Entry, Log

T = TypeVar("T", bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {name} - {message}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template or DEFAULT_TEMPLATE
        self._default_logfile_path = path

        self._config = LoggingConfig()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._files: Dict[str, io.BufferedWriter] = {}
        self._file_locks: Dict[str, asyncio.Lock] = {}
        self._initialized = False

    @property
    def name(self):
        return self._name

    async def initialize(self):
        if self._initialized:
            return

        self._loop = asyncio.get_event_loop()
        self._initialized = True

    async def log(
        self,
        entry: T,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if self._config.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        filename, line_number, function_name = self._find_caller()

        logfile_path = path or self._default_logfile_path or self._config.path
        if logfile_path:
            await self._log_to_file(
                Log(
                    entry=entry,
                    logger=self._name,
                    filename=filename,
                    function_name=function_name,
                    line_number=line_number,
                ),
                logfile_path,
            )

        await self._log(
            entry,
            template=template or self._default_template,
            context={
                "name": self._name,
                "filename": filename,
                "function_name": function_name,
                "line_number": line_number,
                "thread_id": threading.get_native_id(),
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            },
        )

    async def _log(
        self,
        entry: Entry,
        template: str,
        context: dict,
    ):
        stream = sys.stdout if self._config.stream == StreamType.STDOUT else sys.stderr
        line = entry.to_template(template, context=context)

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            stream,
            line,
        )

    def _write_to_stream(self, stream: io.TextIOBase, line: str):
        stream.write(f"{line}\n")
        stream.flush()

    async def _log_to_file(self, log: Log, logfile_path: str):
        logfile_path = str(pathlib.Path(logfile_path).absolute())

        file_lock = self._file_locks.setdefault(logfile_path, asyncio.Lock())
        async with file_lock:
            if self._files.get(logfile_path) is None or self._files[logfile_path].closed:
                self._files[logfile_path] = await self._loop.run_in_executor(
                    None,
                    self._open_file,
                    logfile_path,
                )

            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                log,
                logfile_path,
            )

    def _open_file(self, logfile_path: str):
        directory = os.path.dirname(logfile_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        return open(logfile_path, "ab+")

    def _write_to_file(self, log: Log, logfile_path: str):
        logfile = self._files[logfile_path]
        logfile.write(msgspec.json.encode(log) + b"\n")
        logfile.flush()

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(2)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )

    async def close(self):
        for logfile_path, logfile in list(self._files.items()):
            if logfile.closed is False:
                await self._loop.run_in_executor(None, logfile.close)

            del self._files[logfile_path]
