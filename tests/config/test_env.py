from __future__ import annotations

import pytest

from ethfetcher.config import (
    ConfigurationError,
    MissingConfigurationError,
    require_env_var,
    require_env_vars,
)
from ethfetcher.config.env import optional_positive_float, optional_positive_int


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.delenv("MISSING_B", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert exc.value.names == ("MISSING_A", "MISSING_B")
    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_positive_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert optional_positive_int("EXAMPLE_INT", 8) == 8

    monkeypatch.setenv("EXAMPLE_INT", "3")
    assert optional_positive_int("EXAMPLE_INT", 8) == 3


@pytest.mark.parametrize("raw", ["zero", "0", "-2", "1.5"])
def test_optional_positive_int_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
) -> None:
    monkeypatch.setenv("EXAMPLE_INT", raw)

    with pytest.raises(ConfigurationError, match="EXAMPLE_INT"):
        optional_positive_int("EXAMPLE_INT", 8)


def test_optional_positive_float(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLOAT", " ")
    assert optional_positive_float("EXAMPLE_FLOAT", None) is None

    monkeypatch.setenv("EXAMPLE_FLOAT", "2.5")
    assert optional_positive_float("EXAMPLE_FLOAT", None) == 2.5

    monkeypatch.setenv("EXAMPLE_FLOAT", "-1")
    with pytest.raises(ConfigurationError):
        optional_positive_float("EXAMPLE_FLOAT", None)
