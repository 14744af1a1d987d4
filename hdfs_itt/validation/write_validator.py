from hdfs_itt.cluster import ChecksumRecord, HdfsShell
from hdfs_itt.errors import WriteVerificationFailed
from hdfs_itt.logging import Logger, VerificationError, VerificationInfo


class WriteValidator:
    """
    Asks the cluster for the checksum of the file the system under test
    wrote and compares algorithm and value with the baseline taken when
    the reference file was uploaded.
    """

    def __init__(
        self,
        hdfs: HdfsShell,
        logger: Logger | None = None,
        log_path: str | None = None,
    ) -> None:
        self._hdfs = hdfs
        self._logger = logger or Logger()
        self._log_path = log_path

    async def validate(
        self,
        target_path: str,
        baseline: ChecksumRecord,
    ) -> ChecksumRecord:
        challenge = await self._hdfs.checksum(target_path)

        async with self._logger.context(
            name="write_validator",
            path=self._log_path,
        ) as ctx:
            if baseline.matches(challenge):
                await ctx.log(
                    VerificationInfo(
                        message="Write checksums Ok",
                        path=target_path,
                    )
                )

                return challenge

            await ctx.log(
                VerificationError(
                    message="Write: HDFS Checksum mismatch",
                    path=target_path,
                    expected=str(baseline),
                    actual=str(challenge),
                )
            )

        raise WriteVerificationFailed(str(baseline), str(challenge))
