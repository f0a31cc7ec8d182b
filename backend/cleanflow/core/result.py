"""Result — tagged Success/Failure carrier for use case inputs and outputs.

Invariants:
    - A Result is exactly one of Success (data) or Failure (error)
    - Failure always holds an exception instance, never None
    - Both variants are frozen once built

Design Decisions:
    - Two dataclasses instead of one struct with two nullable fields: the tag
      is the type, so callers must match on it before touching the data
    - Frozen dataclasses get __match_args__ for free: `case Success(value=v)`
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Usable data produced by a decoder or a use case."""
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Error captured by a decoder or a use case instead of being raised."""
    error: BaseException

    def __post_init__(self) -> None:
        if not isinstance(self.error, BaseException):
            raise TypeError(
                f"Failure requires an exception, got {type(self.error).__name__}",
            )

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Success[T], Failure]
