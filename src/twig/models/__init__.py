"""Data models for twig."""

from .command import (
    Command,
    CommitReference,
    DeleteBranch,
    Examine,
    NewBranch,
    NewCommit,
)
from .commit import Commit

__all__ = [
    "Command",
    "Commit",
    "CommitReference",
    "DeleteBranch",
    "Examine",
    "NewBranch",
    "NewCommit",
]
