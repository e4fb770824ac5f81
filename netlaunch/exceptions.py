"""
Custom exception hierarchy for netlaunch.

Structured error handling with clear categories:
- Input errors (malformed identifiers, amounts, missing answers)
- Lookup errors (unknown account, launch or campaign)
- Local workspace errors (unreadable genesis, chain binary failures)
- Remote failures (network facade errors)
- Control-flow signals (declined overwrite)

Nothing in this package retries. Every error is surfaced to the caller
as soon as it happens.

Usage:
    from netlaunch.exceptions import RemoteFailure

    try:
        response = await client.get(url)
    except httpx.TransportError as e:
        raise RemoteFailure("network unreachable", service="spn") from e
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class NetLaunchError(Exception):
    """
    Base exception for all netlaunch errors.

    Catch `NetLaunchError` to handle any error raised by the workflows.
    """

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


# ── Input Errors ──────────────────────────────────────────────────


class InvalidFormatError(NetLaunchError, ValueError):
    """
    Raised when user-supplied text cannot be parsed.

    Examples:
    - Launch or campaign ID that is not a positive decimal integer
    - Coin amount string with an unknown layout
    """

    def __init__(
        self,
        message: str,
        *,
        value: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.value = value


class InvalidAmountError(InvalidFormatError):
    """Raised when a coin amount list (e.g. total supply) is malformed."""


class IncompleteInputError(NetLaunchError):
    """
    Raised when required onboarding answers were left empty.

    No partial validator profile is ever returned alongside this error.
    """

    def __init__(
        self,
        message: str,
        *,
        fields: Sequence[str] = (),
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.fields = list(fields)


class NoFieldsProvidedError(NetLaunchError):
    """Raised when a campaign update carries nothing to change."""

    def __init__(
        self,
        message: str,
        *,
        flags: Sequence[str] = (),
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.flags = list(flags)


# ── Lookup Errors ─────────────────────────────────────────────────


class NotFoundError(NetLaunchError):
    """
    Raised when an account, chain launch or campaign does not exist.
    """

    def __init__(
        self,
        message: str,
        *,
        resource: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.resource = resource
        self.key = key


# ── Local Workspace Errors ────────────────────────────────────────


class GenesisParseError(NetLaunchError):
    """Raised when the genesis file is missing, unreadable or malformed."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str | Path] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.path = str(path) if path is not None else None


class ChainCommandError(NetLaunchError):
    """
    Raised when the chain binary exits with a non-zero status or prints
    output that cannot be used.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class ConfigurationError(NetLaunchError):
    """Raised when the configuration file or overrides are invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.config_path = config_path


# ── Remote Failures ───────────────────────────────────────────────


class RemoteFailure(NetLaunchError):
    """
    Raised when the network facade fails for any reason other than
    a missing record: transport errors, unexpected status codes or a
    rejected transaction.
    """

    def __init__(
        self,
        message: str,
        *,
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.service = service
        self.status_code = status_code


# ── Control-flow Signals ──────────────────────────────────────────


class WorkspaceConflict(NetLaunchError):
    """
    Raised when a chain home already exists and the user declined to
    overwrite it.

    This is NOT a failure. The chain init workflow catches it and
    reports a "declined" outcome, leaving the workspace untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str | Path] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.path = str(path) if path is not None else None
