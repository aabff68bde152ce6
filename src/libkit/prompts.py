"""Interactive collection of replacement attribute values."""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from .manifest import ATTRIBUTE_FIELDS, AttributeSet
from .validators import Validator, validators_for

__all__ = ["AttributePrompter", "PROMPT_MESSAGES"]


LOGGER = logging.getLogger(__name__)

PROMPT_MESSAGES = {
    "name": "Enter an updated name for the library, including the namespace",
    "description": "Enter an updated short description for the library",
    "author": "Enter an updated author for the library",
    "copyright": "Enter an updated copyright for the library",
}

SEPARATOR = "-" * 66

AskFunc = Callable[..., str]
ConfirmFunc = Callable[..., bool]


class AttributePrompter:
    """Ask the operator for new attribute values until they approve them."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        ask: AskFunc | None = None,
        confirm: ConfirmFunc | None = None,
    ) -> None:
        self.console = console or Console()
        self._ask = ask or Prompt.ask
        self._confirm = confirm or Confirm.ask

    def ask_field(self, field: str, default: str, validator: Validator) -> str:
        """Ask for ``field`` until ``validator`` accepts the answer."""

        while True:
            answer = self._ask(PROMPT_MESSAGES[field], default=default, console=self.console)
            value = (answer or "").strip()
            result = validator(value)
            if result is True:
                return value
            LOGGER.debug("rejected %s=%r: %s", field, value, result)
            self.console.print(f"[red]{escape(str(result))}[/red]")

    def collect(self, current: AttributeSet, defaults: AttributeSet | None = None) -> AttributeSet:
        """Ask for every field, validating against ``current``.

        ``defaults`` prefill the answers and fall back to ``current``.
        """

        validators = validators_for(current)
        prefill = defaults or current
        values = {
            field: self.ask_field(field, getattr(prefill, field), validators[field])
            for field in ATTRIBUTE_FIELDS
        }
        return AttributeSet(**values)

    def review(self, current: AttributeSet, proposed: AttributeSet) -> bool:
        """Show the pending changes and ask whether to apply them."""

        self.console.print(f"[yellow]{SEPARATOR}[/yellow]")
        for field, old, new in current.changes(proposed):
            self.console.print(
                f"[yellow]{field.capitalize()}:[/yellow] [cyan]{escape(old)}[/cyan] "
                f"[yellow]->[/yellow] [cyan]{escape(new)}[/cyan]",
                highlight=False,
            )
        self.console.print(f"[yellow]{SEPARATOR}[/yellow]")
        return bool(
            self._confirm("Do you want to apply these changes?", default=False, console=self.console)
        )

    def run(self, current: AttributeSet, defaults: AttributeSet | None = None) -> AttributeSet:
        """Loop over :meth:`collect` and :meth:`review` until approved."""

        while True:
            proposed = self.collect(current, defaults)
            if self.review(current, proposed):
                return proposed
