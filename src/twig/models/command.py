"""Command models produced by the twig grammar."""

from typing import Union

from pydantic import BaseModel, Field


class CommitReference(BaseModel):
    """A commit named relative to a branch head.

    ``offset`` counts parent hops back from the head of ``base``; zero is the
    head itself.
    """

    base: str
    offset: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        if self.offset == 0:
            return self.base
        return f"{self.base}~{self.offset}"


class NewBranch(BaseModel):
    """Bind ``name`` to the commit ``ref`` denotes."""

    name: str
    ref: CommitReference

    model_config = {"frozen": True}


class NewCommit(BaseModel):
    """Grow ``branch`` by one commit carrying ``payload``."""

    payload: str
    branch: str

    model_config = {"frozen": True}


class DeleteBranch(BaseModel):
    """Remove ``name`` from the branch table."""

    name: str

    model_config = {"frozen": True}


class Examine(BaseModel):
    """Dump the branch table and its reachable history."""

    model_config = {"frozen": True}


Command = Union[NewBranch, NewCommit, DeleteBranch, Examine]
