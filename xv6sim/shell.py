"""Command-line parser of the shell: tokens and a tree of commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .syscalls import OpenMode

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10


class ShellSyntaxError(ValueError):
    """The command line cannot be parsed."""


@dataclass
class ExecCmd:
    """Run a program with arguments; an empty argv does nothing."""

    argv: List[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with file descriptor ``fd`` opened on ``file``."""

    cmd: "Command"
    file: str
    mode: OpenMode
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left``, wait for it, then run ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` without waiting for it."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Scanner:
    def __init__(self, text: str) -> None:
        end = text.find("\0")
        self.text = text if end < 0 else text[:end]
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def rest(self) -> str:
        return self.text[self.pos:]

    def _skip_space(self) -> None:
        while not self.at_end and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, toks: str) -> bool:
        """Skip blanks; whether the next character is one of ``toks``."""
        self._skip_space()
        return not self.at_end and self.text[self.pos] in toks

    def gettoken(self) -> Tuple[str, str]:
        """The next token as (kind, text); kind is "" at the end of input."""
        self._skip_space()
        text = self.text
        start = self.pos
        if self.at_end:
            return "", ""
        c = text[start]
        if c in "|();&<":
            kind = c
            self.pos += 1
        elif c == ">":
            self.pos += 1
            if text.startswith(">", self.pos):
                kind = "+"
                self.pos += 1
            else:
                kind = ">"
        else:
            kind = "a"
            while not self.at_end and text[self.pos] not in WHITESPACE + SYMBOLS:
                self.pos += 1
        token = text[start:self.pos]
        self._skip_space()
        return kind, token


class _Parser(_Scanner):
    def line(self) -> Command:
        cmd = self.pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            kind, _ = self.gettoken()
            file_kind, file = self.gettoken()
            if file_kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if kind == "<":
                cmd = RedirCmd(cmd, file, OpenMode.RDONLY, 0)
            else:
                cmd = RedirCmd(cmd, file, OpenMode.WRONLY | OpenMode.CREATE, 1)
        return cmd

    def block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.peek("("):
            return self.block()
        cmd = ExecCmd()
        ret = self.redirs(cmd)
        while not self.peek("|)&;"):
            kind, word = self.gettoken()
            if not kind:
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            cmd.argv.append(word)
            if len(cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def tokenize(s: str) -> List[Tuple[str, str]]:
    """Split a command line into (kind, text) tokens.

    The kind is the symbol itself, "+" for ">>", or "a" for a word.
    """
    scanner = _Scanner(s)
    tokens = []
    while True:
        kind, text = scanner.gettoken()
        if not kind:
            return tokens
        tokens.append((kind, text))


def parse_command(s: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.line()
    parser.peek("")
    if not parser.at_end:
        raise ShellSyntaxError(f"leftovers: {parser.rest}")
    return cmd