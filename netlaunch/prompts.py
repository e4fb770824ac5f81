"""
Interactive prompt collaborator.

Workflows ask the user two kinds of things: a yes/no confirmation and
a labelled text question with an optional default. Both block until the
user answers; no timeout is applied here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt


class Prompter(ABC):
    """Abstract source of interactive answers."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question. Declining returns False."""
        ...

    @abstractmethod
    def ask(self, label: str, default: Optional[str] = None) -> str:
        """Ask a text question; an empty answer takes the default."""
        ...


class RichPrompter(Prompter):
    """Terminal prompts rendered with rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm(self, message: str) -> bool:
        return Confirm.ask(message, default=False, console=self.console)

    def ask(self, label: str, default: Optional[str] = None) -> str:
        if default is None:
            answer = Prompt.ask(label, console=self.console)
        else:
            answer = Prompt.ask(label, default=default, console=self.console)
        return (answer or "").strip()
