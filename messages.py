# messages.py
# Request and response messages exchanged between the host and the search driver

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field


class MessageKind(str, Enum):
    PROGRESS = "progress"
    SOLVED = "solved"
    UNSOLVED = "unsolved"
    FAILED = "failed"


class SolveRequest(BaseModel):
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)


class ProgressMessage(BaseModel):
    kind: Literal[MessageKind.PROGRESS] = MessageKind.PROGRESS
    request_id: int
    attempts: int = Field(ge=0)


class SolvedMessage(BaseModel):
    kind: Literal[MessageKind.SOLVED] = MessageKind.SOLVED
    request_id: int
    board: list[list[int]]
    attempts: int = Field(ge=0)


class UnsolvedMessage(BaseModel):
    kind: Literal[MessageKind.UNSOLVED] = MessageKind.UNSOLVED
    request_id: int
    attempts: int = Field(ge=0)


class FailedMessage(BaseModel):
    """The worker crashed; error carries the exception text."""

    kind: Literal[MessageKind.FAILED] = MessageKind.FAILED
    request_id: int
    error: str


TerminalMessage = Union[SolvedMessage, UnsolvedMessage, FailedMessage]
SearchMessage = Union[ProgressMessage, SolvedMessage, UnsolvedMessage, FailedMessage]


def is_terminal(message: SearchMessage) -> bool:
    return message.kind != MessageKind.PROGRESS
