"""Error kinds raised by the Splitter deployment tooling.

Each error carries a stable, machine-readable ``code`` so that operators (and
the CLI) can tell "no contract was deployed" apart from "contract deployed
but unverified".
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class ErrorCode(str, Enum):
    """Stable error identifiers."""

    CONFIGURATION = "E_CONFIGURATION"
    DEPLOYMENT = "E_DEPLOYMENT"
    VERIFICATION = "E_VERIFICATION"


class SplitterDeployError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for k, v in self.context.items():
            if v:
                parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "kind": self.kind,
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ConfigurationError(SplitterDeployError):
    """Unknown network, or a required configuration value is missing/empty.

    Always raised before any chain interaction.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CONFIGURATION, hint=hint, context=context)


class DeploymentError(SplitterDeployError):
    """The deployment transaction failed. Never retried."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.DEPLOYMENT, hint=hint, context=context)


class VerificationError(SplitterDeployError):
    """Explorer verification failed; the contract itself is already live."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VERIFICATION, hint=hint, context=context)


__all__ = [
    "ConfigurationError",
    "DeploymentError",
    "ErrorCode",
    "SplitterDeployError",
    "VerificationError",
]
