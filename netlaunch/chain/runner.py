"""
Thin wrapper around the chain binary.

Each method runs one CLI command of a Cosmos SDK chain binary and raises
ChainCommandError when it exits non-zero. Building the binary and the
on-disk genesis layout are the binary's business, not ours.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Optional, Sequence

from netlaunch.exceptions import ChainCommandError

logger = logging.getLogger(__name__)


class ChainRunner:
    """Runs `binary` subcommands against a chain home."""

    def __init__(
        self,
        binary: str,
        *,
        keyring_backend: str = "test",
        keyring_dir: Optional[Path] = None,
    ):
        self.binary = binary
        self.keyring_backend = keyring_backend
        self.keyring_dir = keyring_dir

    def run(self, args: Sequence[str]) -> str:
        """Run the binary with args and return its stdout."""
        cmd = [self.binary, *args]
        logger.debug("chain_command", extra={"command": " ".join(cmd)})
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise ChainCommandError(
                f"Chain binary not found: {self.binary}", command=cmd,
            ) from e

        if proc.returncode != 0:
            raise ChainCommandError(
                f"Command failed: {' '.join(cmd)}\nSTDERR:\n{proc.stderr}",
                command=cmd,
                returncode=proc.returncode,
                stderr=proc.stderr,
            )
        return proc.stdout

    def _keyring_flags(self) -> list[str]:
        flags = ["--keyring-backend", self.keyring_backend]
        if self.keyring_dir is not None:
            flags += ["--keyring-dir", str(self.keyring_dir)]
        return flags

    # ── Commands ─────────────────────────────────────────────────

    def init(self, home: Path, chain_id: str, moniker: str) -> None:
        self.run([
            "init", moniker,
            "--chain-id", chain_id,
            "--home", str(home),
        ])

    def add_genesis_account(self, home: Path, address: str, coins: str) -> None:
        self.run([
            "add-genesis-account", address, coins,
            "--home", str(home),
            *self._keyring_flags(),
        ])

    def gentx(
        self,
        home: Path,
        account: str,
        amount: str,
        *,
        chain_id: str,
        output_document: Path,
        flags: Optional[dict[str, str]] = None,
    ) -> None:
        args = [
            "gentx", account, amount,
            "--chain-id", chain_id,
            "--home", str(home),
            "--output-document", str(output_document),
            *self._keyring_flags(),
        ]
        for flag, value in (flags or {}).items():
            if value:
                args += [f"--{flag}", value]
        self.run(args)

    def keys_show(self, name: str) -> dict[str, Any]:
        """Return the keyring entry for `name` as parsed JSON."""
        out = self.run([
            "keys", "show", name,
            "--output", "json",
            *self._keyring_flags(),
        ])
        try:
            return json.loads(out)
        except json.JSONDecodeError as e:
            raise ChainCommandError(
                f"Unexpected output from keys show for {name!r}",
                command=[self.binary, "keys", "show", name],
            ) from e
