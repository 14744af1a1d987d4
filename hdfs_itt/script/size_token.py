import re
from enum import Enum

from hdfs_itt.errors import MalformedToken


SIZE_TOKEN_PATTERN = re.compile(r"(?P<value>[0-9]+)(?P<suffix>[km%]?)")


class SizeUnit(Enum):
    BYTES = ""
    KILO = "k"
    MEGA = "m"
    PERCENT = "%"


def parse_size_token(token: str) -> tuple[int, SizeUnit]:
    match = SIZE_TOKEN_PATTERN.fullmatch(token)
    if match is None:
        raise MalformedToken(token)

    value = int(match.group("value"))
    unit = SizeUnit(match.group("suffix"))
    if unit == SizeUnit.PERCENT and value > 100:
        raise MalformedToken(token)

    return value, unit


def resolve(token: str, total: int) -> int:
    """
    Resolve a symbolic size token against a known total size.

    ``"42"`` is 42 bytes, ``"3k"`` is 3 * 1024, ``"2m"`` is 2 * 1024 * 1024
    and ``"10%"`` is ``10 * total // 100``. Percentages floor so byte
    ranges are reproducible.
    """
    value, unit = parse_size_token(token)

    match unit:
        case SizeUnit.KILO:
            return value * 1024

        case SizeUnit.MEGA:
            return value * 1024 * 1024

        case SizeUnit.PERCENT:
            return value * total // 100

        case _:
            return value
