"""
Explicit success/failure values for calls to external services
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: str
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
