"""
Integration test tool error hierarchy.

Every failure raised by the tool is fatal to the current phase. Errors
carry a human-readable message plus a context dict so the CLI and the
structured logs can report the offending token, path, ordinal or digest
pair without parsing the message.
"""

from __future__ import annotations

from typing import Any


class ITTError(Exception):
    """
    Base exception for integration test tool errors.

    Example:
        raise PortNotExposed(ordinal=2, port=50075)
    """

    def __init__(
        self,
        message: str,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        ctx = f" {self.context}" if self.context else ""
        return f"{self.message}{ctx}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"context={self.context})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": {key: str(value) for key, value in self.context.items()},
        }


class ConfigurationError(ITTError):
    pass


class MalformedToken(ITTError):
    def __init__(self, token: str) -> None:
        super().__init__(
            f"Invalid size token '{token}'",
            token=token,
        )
        self.token = token


class EmptyOrMalformedProgram(ITTError):
    def __init__(self, reason: str, item: str | None = None) -> None:
        if item is None:
            super().__init__(f"Invalid program: {reason}")

        else:
            super().__init__(f"Invalid program item '{item}': {reason}", item=item)

        self.item = item


class UnsortedSplitPoints(ITTError):
    def __init__(self, points: list[int], reason: str) -> None:
        super().__init__(
            f"Invalid write program split points: {reason}",
            points=points,
        )
        self.points = points


class ReadPastEndOfFile(ITTError):
    def __init__(self, offset: int, length: int, size: int) -> None:
        super().__init__(
            f"Read of {length} bytes at offset {offset} exceeds file size {size}",
            offset=offset,
            length=length,
            size=size,
        )
        self.offset = offset
        self.length = length
        self.size = size


class PortNotExposed(ITTError):
    def __init__(self, ordinal: int, port: int) -> None:
        super().__init__(
            f"Port {port} @C[{ordinal}] is not mapped to host port space",
            ordinal=ordinal,
            port=port,
        )
        self.ordinal = ordinal
        self.port = port


class MalformedRecord(ITTError):
    """
    Raised for unreadable text exchanged with the cluster or left in the
    working directory: checksum lines, NAT entries, addresses, manifests.
    """

    def __init__(self, kind: str, text: str, reason: str | None = None) -> None:
        super().__init__(
            f"Cannot parse {kind} '{text.strip()}'",
            kind=kind,
            reason=reason or "malformed",
        )
        self.kind = kind
        self.text = text


class NotPrepared(ITTError):
    def __init__(self, path: str) -> None:
        super().__init__(
            "Working directory is not prepared, run prepare first",
            path=path,
        )
        self.path = path


class SourceUnavailable(ITTError):
    def __init__(self, path: str) -> None:
        super().__init__(
            "Cannot materialize source file",
            path=path,
        )
        self.path = path


class ExternalCommandFailed(ITTError):
    def __init__(
        self,
        command: list[str],
        returncode: int,
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"Command exited with status {returncode}",
            command=" ".join(command),
            stderr=stderr.strip(),
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class ReadVerificationFailed(ITTError):
    """
    Raised once every manifest entry has been checked. ``failures`` holds
    ``(path, expected, actual)`` for each mismatch; ``actual`` is ``None``
    for a missing output file.
    """

    def __init__(self, failures: list[tuple[str, str, str | None]]) -> None:
        paths = [path for path, _, _ in failures]
        super().__init__(
            f"Read: Checksum mismatch in {len(failures)} file(s)",
            paths=paths,
        )
        self.failures = failures

    def __str__(self) -> str:
        lines = [self.message]
        for path, expected, actual in self.failures:
            lines.append(f"{path}: expected={expected} actual={actual or 'missing'}")

        return "\n".join(lines)


class WriteVerificationFailed(ITTError):
    def __init__(self, original: str, challenge: str) -> None:
        super().__init__(
            "Write: HDFS Checksum mismatch",
            original=original,
            challenge=challenge,
        )
        self.original = original
        self.challenge = challenge

    def __str__(self) -> str:
        return f"{self.message}\nOrig: {self.original}\nChal: {self.challenge}"


class LifecycleError(ITTError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move from {current} to {target}",
            current=current,
            target=target,
        )
