from __future__ import annotations

from dataclasses import dataclass

from hdfs_itt.errors import MalformedRecord


@dataclass(slots=True, frozen=True)
class ChecksumRecord:
    """
    One line of ``hdfs dfs -checksum`` output, e.g.
    ``/user/root/test-data/file  MD5-of-0MD5-of-512CRC32C  0000020000...``.

    Two records match when algorithm and value agree; the path is expected
    to differ between the uploaded file and the written copy.
    """

    path: str
    algorithm: str
    value: str

    @classmethod
    def parse(cls, output: str) -> ChecksumRecord:
        fields = output.split()
        if len(fields) < 3:
            raise MalformedRecord(
                "checksum record",
                output,
                reason="expected path, algorithm and value",
            )

        path, algorithm, value = fields[:3]
        return cls(
            path=path,
            algorithm=algorithm,
            value=value,
        )

    def matches(self, other: ChecksumRecord) -> bool:
        return self.algorithm == other.algorithm and self.value == other.value

    def __str__(self) -> str:
        return f"{self.path}\t{self.algorithm}\t{self.value}"
