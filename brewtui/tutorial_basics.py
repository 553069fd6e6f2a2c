"""A shopping-list example: move a cursor and tick off items."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from .key import KeyMsg
from .messages import Cmd, Msg
from .messages import quit as quit_cmd
from .program import Model, new_program

__all__ = ["ShoppingModel", "initial_model", "main"]


@dataclass(frozen=True)
class ShoppingModel(Model):
    """A list of choices, a cursor over them and the set of ticked indexes."""

    choices: tuple[str, ...] = ()
    cursor: int = 0
    selected: frozenset[int] = field(default_factory=frozenset)

    def init(self) -> Optional[Cmd]:
        return None

    def update(self, msg: Msg) -> tuple["ShoppingModel", Optional[Cmd]]:
        if not isinstance(msg, KeyMsg):
            return self, None

        key = str(msg)
        if key in ("ctrl+c", "q"):
            return self, quit_cmd
        if key in ("up", "k"):
            if self.cursor > 0:
                return replace(self, cursor=self.cursor - 1), None
        elif key in ("down", "j"):
            if self.cursor < len(self.choices) - 1:
                return replace(self, cursor=self.cursor + 1), None
        elif key in ("enter", " "):
            return replace(self, selected=self.selected ^ {self.cursor}), None
        return self, None

    def view(self) -> str:
        lines = ["What should we buy at the market?\n\n"]
        for i, choice in enumerate(self.choices):
            cursor = ">" if i == self.cursor else " "
            checked = "x" if i in self.selected else " "
            lines.append(f"{cursor} [{checked}] {choice}\n")
        lines.append("\nPress q to quit.\n")
        return "".join(lines)


def initial_model() -> ShoppingModel:
    """The starting list, with nothing selected."""
    return ShoppingModel(choices=("Buy carrots", "Buy celery", "Buy kohlrabi"))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the shopping list; returns the process exit status."""
    parser = argparse.ArgumentParser(description="Pick items from a shopping list.")
    parser.parse_args(argv)

    program = new_program(initial_model())
    try:
        program.start()
    except Exception as err:
        print(f"Alas, there's been an error: {err}", end="")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())