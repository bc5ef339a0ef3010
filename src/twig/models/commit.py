"""Commit model for the twig branch store."""

from typing import Iterator, Optional

from pydantic import BaseModel, PrivateAttr


class Commit(BaseModel):
    """Represents one immutable unit of history.

    A commit is owned by every branch pointing at it and by every child
    commit whose ``parent`` is this commit. The store tracks those owners
    explicitly through :meth:`retain` and :meth:`release`.
    """

    data: str
    parent: Optional["Commit"] = None

    _owners: int = PrivateAttr(default=0)

    model_config = {"frozen": True}

    @property
    def owners(self) -> int:
        """Number of live references to this commit."""
        return self._owners

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def retain(self) -> "Commit":
        """Register one more owner and return the commit."""
        self._owners += 1
        return self

    def release(self) -> bool:
        """Drop one owner. Returns True when that was the last one."""
        if self._owners <= 0:
            raise RuntimeError(f"Commit '{self.data}' released more often than retained")
        self._owners -= 1
        return self._owners == 0

    def ancestors(self) -> Iterator["Commit"]:
        """Yield this commit followed by each parent up to the root."""
        commit: Optional[Commit] = self
        while commit is not None:
            yield commit
            commit = commit.parent

    def __repr__(self) -> str:
        # The default repr recurses through every parent.
        return f"Commit(data={self.data!r}, owners={self._owners})"
