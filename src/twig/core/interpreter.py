"""Read-parse-execute loop driving the commit store."""

import logging
from typing import Iterable

from twig.core.grammar import ParseError, parse_command
from twig.core.store import CommitStore, DatabaseError, Emit

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Error"


class Interpreter:
    """Feeds input lines through the grammar into a seeded store."""

    def __init__(self, root_data: str, emit: Emit, verbose_errors: bool = False):
        self.emit = emit
        self.verbose_errors = verbose_errors
        self.store = CommitStore(emit)
        self.store.seed(root_data)

    def handle(self, line: str) -> bool:
        """Run one input line. Returns False if it was reported as a failure."""
        text = line.strip()
        try:
            command = parse_command(text)
            self.store.execute(command)
        except ParseError as e:
            logger.debug("Parse failure: %s", e)
            self._fail("Could not parse command")
            return False
        except DatabaseError as e:
            logger.debug("Command %r failed: %s", text, e.message)
            self._fail(e.message)
            return False
        return True

    def run(self, lines: Iterable[str]) -> int:
        """Handle every line until the source is exhausted.

        Returns the number of lines that failed.
        """
        failures = 0
        for line in lines:
            if not self.handle(line):
                failures += 1
        logger.debug("Input exhausted after %d failure(s)", failures)
        return failures

    def _fail(self, detail: str) -> None:
        if self.verbose_errors:
            self.emit(f"{FAILURE_MESSAGE}: {detail}")
        else:
            self.emit(FAILURE_MESSAGE)
