"""An example that checks a web server's status with a command."""

from __future__ import annotations

import argparse
import urllib.error
import urllib.request
from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import Optional, Sequence

from .key import KeyMsg, KeyType
from .messages import Cmd, Msg
from .messages import quit as quit_cmd
from .program import Model, new_program

__all__ = ["StatusMsg", "ErrMsg", "StatusModel", "check_server", "main"]

DEFAULT_URL = "https://example.com/"
_TIMEOUT = 10.0


@dataclass(frozen=True)
class StatusMsg:
    """The HTTP status code a server answered with."""

    code: int


class ErrMsg(Exception):
    """A failed request, carried as a message."""

    def __init__(self, err: BaseException) -> None:
        super().__init__(err)
        self.err = err

    def __str__(self) -> str:
        return str(self.err)


def check_server(url: str) -> Msg:
    """Request ``url`` and return a StatusMsg, or an ErrMsg if the request failed."""
    try:
        with urllib.request.urlopen(url, timeout=_TIMEOUT) as response:
            return StatusMsg(response.status)
    except urllib.error.HTTPError as exc:
        code = exc.code
        exc.close()
        return StatusMsg(code)
    except (urllib.error.URLError, OSError, ValueError) as exc:
        return ErrMsg(exc)


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


@dataclass(frozen=True)
class StatusModel(Model):
    """The URL being checked and what came of the check."""

    url: str = DEFAULT_URL
    status: int = 0
    err: Optional[BaseException] = None

    def init(self) -> Optional[Cmd]:
        url = self.url
        return lambda: check_server(url)

    def update(self, msg: Msg) -> tuple["StatusModel", Optional[Cmd]]:
        if isinstance(msg, StatusMsg):
            return replace(self, status=msg.code), quit_cmd
        if isinstance(msg, ErrMsg):
            return replace(self, err=msg), quit_cmd
        if isinstance(msg, KeyMsg) and msg.type == KeyType.CTRL_C:
            return self, quit_cmd
        return self, None

    def view(self) -> str:
        if self.err is not None:
            return f"\nWe had some trouble: {self.err}\n\n"
        s = f"Checking {self.url} ... "
        if self.status > 0:
            s += f"{self.status} {_status_text(self.status)}!"
        return "\n" + s + "\n\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check a server's status; returns the process exit status."""
    parser = argparse.ArgumentParser(description="Check a web server's status.")
    parser.add_argument("url", nargs="?", default=DEFAULT_URL)
    args = parser.parse_args(argv)

    program = new_program(StatusModel(url=args.url))
    try:
        program.start()
    except Exception as err:
        print(f"Uh oh, there was an error: {err}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())