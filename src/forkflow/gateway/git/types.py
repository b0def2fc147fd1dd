"""Discriminated union types for git and hosting operations.

Mutations return a success value or CommandFailed; existence queries return
Existence or QueryFailed.
"""

from dataclasses import dataclass
from enum import Enum


class Existence(Enum):
    """Answer to an existence query that completed."""

    EXISTS = "exists"
    ABSENT = "absent"


@dataclass(frozen=True)
class QueryFailed:
    """The query itself could not be answered."""

    message: str


@dataclass(frozen=True)
class CommandSucceeded:
    """Success result from a mutating command."""


@dataclass(frozen=True)
class CommandFailed:
    """Error result from a mutating command."""

    message: str


@dataclass(frozen=True)
class RemoteNotFound:
    """The requested remote is not configured in the repository."""

    remote: str


@dataclass(frozen=True)
class RemoteAlreadyExists:
    """``git remote add`` found a remote with the same name."""

    remote: str
