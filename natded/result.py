"""Result type for steps that can fail without raising.

Used where a failure is an expected outcome to be reported rather than a
bug in the caller: replaying a derivation script, loading configuration.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Ok[T] | Err[E]
