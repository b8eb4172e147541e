"""Tagged results for batched provider calls and generated-JSON parsing."""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failed:
    reason: str


Outcome = Union[Ok[Any], Failed]


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Unparseable:
    raw_text: str
    reason: str = ""


ParseResult = Union[Parsed[Any], Unparseable]
