from __future__ import annotations

from dataclasses import dataclass, field

from hdfs_itt.errors import MalformedRecord


@dataclass(slots=True, frozen=True)
class EntryPoint:
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, address: str) -> EntryPoint:
        host, _, port = address.strip().rpartition(":")
        if not host or not port.isdigit():
            raise MalformedRecord("address", address, reason="expected host:port")

        return cls(host=host, port=int(port))


@dataclass(slots=True)
class NatMap:
    """
    Translation table from a node's internal ``hostname:port`` to the
    ``host:port`` a client on the test host has to dial instead. Stored as
    one ``internal-host:port=host:port`` line per entry.
    """

    entries: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, internal: str) -> bool:
        return internal in self.entries

    def add(self, hostname: str, port: int, address: str) -> None:
        internal = f"{hostname}:{port}"
        if internal in self.entries:
            raise MalformedRecord("NAT entry", internal, reason="duplicate entry")

        self.entries[internal] = address

    def translate(self, authority: str) -> str:
        return self.entries.get(authority, authority)

    def to_lines(self) -> list[str]:
        return [f"{internal}={address}" for internal, address in self.entries.items()]

    @classmethod
    def from_lines(cls, lines: list[str]) -> NatMap:
        nat_map = cls()
        for line in lines:
            line = line.strip()
            if not line:
                continue

            internal, separator, address = line.partition("=")
            if separator != "=" or not internal or not address:
                raise MalformedRecord("NAT entry", line, reason="expected internal=address")

            nat_map.entries[internal] = address

        return nat_map
