"""Result types for rate card loading and validation.

The live quote path never fails, so these are only used where a caller can
actually do something about an error (loading a rate card from disk,
checking its invariants before it is put into service).
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from attrs import frozen
from beartype import beartype

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@frozen
class Ok(Generic[T]):
    """Success result wrapper."""

    value: T

    @beartype
    def is_ok(self) -> bool:
        """Check if result is Ok."""
        return True

    @beartype
    def is_err(self) -> bool:
        """Check if result is Error."""
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise ValueError as this is Ok."""
        raise ValueError("Called unwrap_err on Ok value")

    def and_then(self, func: Callable[[T], "Ok[U] | Err[Any]"]) -> "Ok[U] | Err[Any]":
        """Chain an operation that itself returns a result."""
        return func(self.value)


@frozen
class Err(Generic[E]):
    """Error result wrapper."""

    error: E

    @beartype
    def is_ok(self) -> bool:
        """Check if result is Ok."""
        return False

    @beartype
    def is_err(self) -> bool:
        """Check if result is Error."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise ValueError as this is Err."""
        raise ValueError(f"Called unwrap on Err value: {self.error}")

    def unwrap_err(self) -> E:
        """Get the error value."""
        return self.error

    def and_then(self, func: Callable[[Any], Any]) -> "Err[E]":
        """No-op for Err values."""
        return self


if TYPE_CHECKING:
    Result = Ok[T] | Err[E]
else:

    class Result(Generic[T, E]):
        """Support for ``Result[T, E]`` annotations at runtime."""

        def __class_getitem__(cls, params: Any) -> Any:
            """Support generic type annotations like Result[T, E]."""
            return Ok[Any] | Err[Any]
