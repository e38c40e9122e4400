"""Registered, codespace-scoped error codes and the exception that carries them."""

from __future__ import annotations

from dataclasses import dataclass

_REGISTRY: dict[tuple[str, int], "ErrorCode"] = {}


@dataclass(frozen=True)
class ErrorCode:
    """A registered error: a code that is unique within its codespace."""

    codespace: str
    code: int
    description: str

    def wrap(self, message: str = "") -> "SdkError":
        """Return an exception of this code carrying extra context."""
        return SdkError(self, message)

    def __str__(self) -> str:
        return self.description


class SdkError(Exception):
    """An error raised with a registered :class:`ErrorCode`."""

    def __init__(self, code: ErrorCode, message: str = "") -> None:
        self.code = code
        self.message = message
        super().__init__(str(self))

    def matches(self, code: ErrorCode) -> bool:
        """Tell whether this error was raised with ``code``."""
        return self.code == code

    def __str__(self) -> str:
        if self.message:
            return f"{self.message}: {self.code.description}"
        return self.code.description


def register(codespace: str, code: int, description: str) -> ErrorCode:
    """Register a new error code; a code may be registered once per codespace."""
    existing = _REGISTRY.get((codespace, code))
    if existing is not None:
        raise ValueError(
            f"error with code {code} is already registered: {existing.description!r}"
        )
    error = ErrorCode(codespace, code, description)
    _REGISTRY[(codespace, code)] = error
    return error


SDK_CODESPACE = "sdk"

ERR_INSUFFICIENT_FUNDS = register(SDK_CODESPACE, 5, "insufficient funds")
ERR_UNKNOWN_REQUEST = register(SDK_CODESPACE, 6, "unknown request")
ERR_INVALID_ADDRESS = register(SDK_CODESPACE, 7, "invalid address")
ERR_INVALID_PUB_KEY = register(SDK_CODESPACE, 8, "invalid pubkey")
ERR_INVALID_COINS = register(SDK_CODESPACE, 10, "invalid coins")
ERR_JSON_MARSHAL = register(SDK_CODESPACE, 16, "failed to marshal JSON bytes")
ERR_JSON_UNMARSHAL = register(SDK_CODESPACE, 17, "failed to unmarshal JSON bytes")
ERR_INVALID_REQUEST = register(SDK_CODESPACE, 18, "invalid request")