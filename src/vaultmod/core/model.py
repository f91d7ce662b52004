from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple


class RewriteResult(NamedTuple):
    text: str
    count: int  # number of links rewritten


@dataclass(frozen=True)
class Cursor:
    line: int  # zero-based
    ch: int  # column within the line


@dataclass
class KeyEvent:
    code: str  # host key code, e.g. "Space"
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class LinkClick:
    href: str | None
    internal: bool = True  # rendered as an internal (wiki) link
