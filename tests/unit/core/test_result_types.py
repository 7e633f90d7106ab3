"""Unit tests for the Ok/Err result types."""

import pytest

from dbl_pfl_quote.core.result_types import Err, Ok


class TestResultTypes:
    """Test the result wrappers used by rate card loading."""

    def test_ok(self) -> None:
        """Ok carries a value."""
        result = Ok(42)

        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 42

    def test_err(self) -> None:
        """Err carries an error."""
        result = Err("bad card")

        assert result.is_err()
        assert not result.is_ok()
        assert result.unwrap_err() == "bad card"

    def test_unwrap_on_err_raises(self) -> None:
        """Unwrapping an error is a programming mistake."""
        with pytest.raises(ValueError, match="bad card"):
            Err("bad card").unwrap()

    def test_unwrap_err_on_ok_raises(self) -> None:
        """So is asking an Ok for its error."""
        with pytest.raises(ValueError):
            Ok(1).unwrap_err()

    def test_and_then_chains_ok(self) -> None:
        """Ok passes its value to the next step."""
        result = Ok(2).and_then(lambda value: Ok(value * 10))

        assert result == Ok(20)

    def test_and_then_short_circuits_err(self) -> None:
        """Err skips the next step."""
        calls: list[int] = []

        def step(value: int) -> Ok[int]:
            calls.append(value)
            return Ok(value)

        result = Err("stop").and_then(step)

        assert result == Err("stop")
        assert calls == []

    def test_results_are_frozen(self) -> None:
        """Results cannot be mutated."""
        result = Ok(1)

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]
