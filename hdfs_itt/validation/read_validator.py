import asyncio
import os
import pathlib

from hdfs_itt.digest import Manifest, digest_file
from hdfs_itt.errors import ReadVerificationFailed
from hdfs_itt.logging import Logger, VerificationError, VerificationInfo


class ReadValidator:
    """
    Recomputes the digest of every file the system under test produced and
    compares it with the manifest. All entries are checked before failing.
    """

    def __init__(
        self,
        logger: Logger | None = None,
        log_path: str | None = None,
    ) -> None:
        self._logger = logger or Logger()
        self._log_path = log_path

    async def validate(self, manifest: Manifest) -> None:
        loop = asyncio.get_event_loop()
        failures: list[tuple[str, str, str | None]] = []

        async with self._logger.context(
            name="read_validator",
            path=self._log_path,
        ) as ctx:
            for entry in manifest:
                exists = await loop.run_in_executor(None, os.path.isfile, entry.path)

                actual: str | None = None
                if exists:
                    actual = await loop.run_in_executor(None, digest_file, entry.path)

                if actual == entry.digest:
                    await ctx.log(
                        VerificationInfo(
                            message=f"{entry.path}: OK",
                            path=entry.path,
                        )
                    )
                    continue

                failures.append((entry.path, entry.digest, actual))
                await ctx.log(
                    VerificationError(
                        message=f"{entry.path}: FAILED",
                        path=entry.path,
                        expected=entry.digest,
                        actual=actual or "missing",
                    )
                )

        if failures:
            raise ReadVerificationFailed(failures)

        for entry in manifest:
            await loop.run_in_executor(
                None,
                pathlib.Path(entry.path).unlink,
                True,
            )
