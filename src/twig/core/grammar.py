"""Command grammar for the twig shell.

The grammar recognises four command forms, tried in a fixed order:

    new branch <newname> <srcname>[ ~ <offset>]
    delete branch <name>
    new commit '<payload>' <branchname>
    examine

Tokens are separated by runs of literal spaces. Names are ASCII letters and
digits only. A payload is everything between a pair of single quotes. Each
alternative is attempted from the start of the line and the first one that
succeeds wins; the winning alternative must consume the whole line.
"""

import logging
import string
import sys
from typing import Callable, List, Optional

from twig.models.command import (
    Command,
    CommitReference,
    DeleteBranch,
    Examine,
    NewBranch,
    NewCommit,
)

logger = logging.getLogger(__name__)

NAME_CHARS = frozenset(string.ascii_letters + string.digits)
DIGITS = frozenset(string.digits)
QUOTE = "'"
MAX_OFFSET = sys.maxsize


class ParseError(ValueError):
    """Raised when a line matches none of the command forms."""


class _Mismatch(Exception):
    """Internal signal that the current alternative does not apply."""


class _Cursor:
    """A read position over one line of input."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _take_while(self, allowed: frozenset) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in allowed:
            self.pos += 1
        return self.text[start : self.pos]

    def spaces(self) -> None:
        """Consume one or more spaces."""
        if not self._take_while(frozenset(" ")):
            raise _Mismatch("expected space")

    def optional_spaces(self) -> None:
        self._take_while(frozenset(" "))

    def keyword(self, word: str) -> None:
        if not self.text.startswith(word, self.pos):
            raise _Mismatch(f"expected {word!r}")
        self.pos += len(word)

    def char(self, ch: str) -> None:
        if self.at_end or self.text[self.pos] != ch:
            raise _Mismatch(f"expected {ch!r}")
        self.pos += 1

    def name(self) -> str:
        value = self._take_while(NAME_CHARS)
        if not value:
            raise _Mismatch("expected name")
        return value

    def number(self) -> int:
        digits = self._take_while(DIGITS)
        if not digits:
            raise _Mismatch("expected digits")
        if len(digits.lstrip("0")) > len(str(MAX_OFFSET)):
            raise _Mismatch("offset out of range")
        value = int(digits)
        if value > MAX_OFFSET:
            raise _Mismatch("offset out of range")
        return value

    def quoted(self) -> str:
        self.char(QUOTE)
        end = self.text.find(QUOTE, self.pos)
        if end < 0:
            raise _Mismatch("unterminated payload")
        value = self.text[self.pos : end]
        self.pos = end + 1
        return value


def _offset_suffix(cursor: _Cursor) -> Optional[int]:
    """Parse an optional ``~<digits>`` suffix, restoring the cursor on failure."""
    mark = cursor.pos
    try:
        cursor.optional_spaces()
        cursor.char("~")
        cursor.optional_spaces()
        return cursor.number()
    except _Mismatch:
        cursor.pos = mark
        return None


def _new_branch(cursor: _Cursor) -> Command:
    cursor.optional_spaces()
    cursor.keyword("new")
    cursor.spaces()
    cursor.keyword("branch")
    cursor.spaces()
    name = cursor.name()
    cursor.spaces()
    base = cursor.name()
    offset = _offset_suffix(cursor)
    return NewBranch(name=name, ref=CommitReference(base=base, offset=offset or 0))


def _delete_branch(cursor: _Cursor) -> Command:
    cursor.optional_spaces()
    cursor.keyword("delete")
    cursor.spaces()
    cursor.keyword("branch")
    cursor.spaces()
    return DeleteBranch(name=cursor.name())


def _new_commit(cursor: _Cursor) -> Command:
    cursor.optional_spaces()
    cursor.keyword("new")
    cursor.spaces()
    cursor.keyword("commit")
    cursor.spaces()
    payload = cursor.quoted()
    cursor.spaces()
    return NewCommit(payload=payload, branch=cursor.name())


def _examine(cursor: _Cursor) -> Command:
    cursor.optional_spaces()
    cursor.keyword("examine")
    return Examine()


ALTERNATIVES: List[Callable[[_Cursor], Command]] = [
    _new_branch,
    _delete_branch,
    _new_commit,
    _examine,
]


def parse_command(line: str) -> Command:
    """Parse one line of input into a command.

    The first alternative that matches a prefix of ``line`` is chosen; if it
    leaves anything unconsumed the line is rejected rather than retried with
    later alternatives.

    Raises:
        ParseError: if no alternative matches the whole line.
    """
    for alternative in ALTERNATIVES:
        cursor = _Cursor(line)
        try:
            command = alternative(cursor)
        except _Mismatch:
            continue
        if not cursor.at_end:
            logger.debug(
                "Rejecting %r: trailing input %r", line, cursor.text[cursor.pos :]
            )
            raise ParseError(f"Unexpected trailing input in {line!r}")
        logger.debug("Parsed %r as %r", line, command)
        return command
    raise ParseError(f"Could not parse command {line!r}")
