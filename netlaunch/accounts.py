"""
Account lookup.

The chain init workflow only needs to know that the signing account
exists and what its address is. Creating, importing and deleting keys
stays with the keyring tooling.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from netlaunch.chain.runner import ChainRunner
from netlaunch.exceptions import ChainCommandError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    """A named key in the keyring."""
    name: str
    address: str


class AccountRegistry(ABC):
    """Abstract account lookup."""

    @abstractmethod
    def get_by_name(self, name: str) -> Account:
        """Return the account called `name`. Raises NotFoundError if unknown."""
        ...


class KeyringAccountRegistry(AccountRegistry):
    """Looks accounts up through the chain binary's keyring."""

    def __init__(self, runner: ChainRunner):
        self._runner = runner

    def get_by_name(self, name: str) -> Account:
        try:
            entry = self._runner.keys_show(name)
        except ChainCommandError as e:
            stderr = e.stderr.lower()
            if "not found" in stderr or "not a valid name" in stderr:
                raise NotFoundError(
                    f"account {name} does not exist",
                    resource="account", key=name,
                ) from e
            raise

        if not isinstance(entry, dict):
            raise ChainCommandError(
                f"Unexpected output from keys show for {name!r}: "
                f"expected an object, got {type(entry).__name__}",
                details={"output": entry},
            )
        address = entry.get("address")
        if not address:
            raise NotFoundError(
                f"account {name} has no address in the keyring",
                resource="account", key=name,
            )
        logger.debug("account_resolved", extra={"account": name})
        return Account(name=entry.get("name", name), address=address)


class InMemoryAccountRegistry(AccountRegistry):
    """Fixed set of accounts, for development and tests."""

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts = {a.name: a for a in accounts}

    def add(self, account: Account) -> None:
        self._accounts[account.name] = account

    def get_by_name(self, name: str) -> Account:
        account = self._accounts.get(name)
        if account is None:
            raise NotFoundError(
                f"account {name} does not exist",
                resource="account", key=name,
            )
        return account
