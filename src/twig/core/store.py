"""Branch table and commit graph for the twig shell."""

import logging
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from twig.models.command import (
    Command,
    CommitReference,
    DeleteBranch,
    Examine,
    NewBranch,
    NewCommit,
)
from twig.models.commit import Commit

logger = logging.getLogger(__name__)

ROOT_BRANCH_NAME = "master"

Emit = Callable[[str], None]


class DatabaseError(Exception):
    """Base class for failures applying a command to the store."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BranchDoesntExist(DatabaseError):
    """A command referenced a branch name that is not in the table."""

    def __init__(self, name: str):
        super().__init__(f"Branch ``{name}'' doesn't exist")
        self.name = name


class CommitNotDeepEnough(DatabaseError):
    """An offset walked past the root of a branch's history.

    ``depth`` is the offset that was asked for, not how far the walk got.
    """

    def __init__(self, name: str, depth: int):
        plural = "" if depth == 1 else "s"
        super().__init__(f"Branch ``{name}'' does not go back {depth} commit{plural}")
        self.name = name
        self.depth = depth


class CommitStore:
    """Owns the branch table and the shared commit history.

    Every message the store produces, including destruction notices, goes
    through ``emit``. Operations either complete fully or raise a
    :class:`DatabaseError` before touching the table.
    """

    def __init__(self, emit: Emit):
        self._emit = emit
        self._branches: Dict[str, Commit] = {}
        self._seeded = False

    @property
    def branches(self) -> Mapping[str, Commit]:
        """Read-only view of the branch table."""
        return MappingProxyType(self._branches)

    def __contains__(self, name: object) -> bool:
        return name in self._branches

    def __len__(self) -> int:
        return len(self._branches)

    def seed(self, payload: str) -> Commit:
        """Bind the root branch to a fresh parentless commit."""
        if self._seeded:
            raise RuntimeError("Commit store has already been seeded")
        root = Commit(data=payload)
        self._emit(f"{ROOT_BRANCH_NAME} -> '{root.data}'")
        self._bind(ROOT_BRANCH_NAME, root)
        self._seeded = True
        return root

    def head(self, name: str) -> Commit:
        """Return the commit ``name`` currently points at."""
        try:
            return self._branches[name]
        except KeyError:
            raise BranchDoesntExist(name) from None

    def resolve(self, ref: CommitReference) -> Commit:
        """Walk ``ref.offset`` parents back from the head of ``ref.base``."""
        commit = self.head(ref.base)
        for _ in range(ref.offset):
            if commit.parent is None:
                raise CommitNotDeepEnough(ref.base, ref.offset)
            commit = commit.parent
        return commit

    def new_branch(self, name: str, ref: CommitReference) -> Commit:
        target = self.resolve(ref)
        self._emit(f"{name} -> '{target.data}'")
        self._bind(name, target)
        logger.debug("Branch %s now at %r (from %s)", name, target, ref)
        return target

    def new_commit(self, payload: str, branch: str) -> Commit:
        parent = self.head(branch)
        self._emit(f"{branch} -> '{payload}'")
        commit = Commit(data=payload, parent=parent.retain())
        self._bind(branch, commit)
        logger.debug("Branch %s advanced to %r", branch, commit)
        return commit

    def delete_branch(self, name: str) -> None:
        head = self._branches.pop(name, None)
        if head is None:
            raise BranchDoesntExist(name)
        self._emit(f"{name} deleted")
        logger.debug("Branch %s removed, releasing %r", name, head)
        self._release(head)

    def examine(self) -> str:
        """Emit and return a dump of every branch and its history."""
        dump = self.describe()
        self._emit(dump)
        return dump

    def describe(self) -> str:
        """Render the branch table and each branch's ancestry."""
        lines: List[str] = []
        for name in sorted(self._branches):
            head = self._branches[name]
            lines.append(f"{name}:")
            for depth, commit in enumerate(head.ancestors()):
                marker = "*" if depth == 0 else " "
                lines.append(
                    f"  {marker} ~{depth} '{commit.data}' (owners: {commit.owners})"
                )
        return "\n".join(lines)

    def execute(self, command: Command) -> None:
        """Apply one parsed command."""
        if isinstance(command, NewBranch):
            self.new_branch(command.name, command.ref)
        elif isinstance(command, NewCommit):
            self.new_commit(command.payload, command.branch)
        elif isinstance(command, DeleteBranch):
            self.delete_branch(command.name)
        elif isinstance(command, Examine):
            self.examine()
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def _bind(self, name: str, commit: Commit) -> None:
        # Retain before releasing so rebinding to the same commit keeps it alive.
        commit.retain()
        previous = self._branches.get(name)
        self._branches[name] = commit
        if previous is not None:
            self._release(previous)

    def _release(self, commit: Optional[Commit]) -> None:
        """Drop one owner of ``commit``, destroying orphans up the chain."""
        while commit is not None and commit.release():
            self._emit(f"'{commit.data}' deleted")
            logger.debug("Destroyed %r", commit)
            commit = commit.parent
