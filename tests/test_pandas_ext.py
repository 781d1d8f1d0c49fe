import pytest

# Skip all tests if pandas is not installed
pytest.importorskip("pandas")

import pandas as pd  # noqa: E402

from ryandata_class_validator import (  # noqa: E402
    UNDEFINED,
    Err,
    Ok,
    RyanDataClassValidationError,
    register_accessor,
    validate_dataframe,
    validate_records,
)
from tests.sample_models import Person  # noqa: E402


class TestValidateRecords:
    """Test validate_records function."""

    def test_one_result_per_record(self) -> None:
        """Each record should produce its own result, in order."""
        results = validate_records(Person, [{"name": "Ada", "age": 36}, {"name": "Bob"}])

        assert isinstance(results[0], Ok)
        assert results[0].value.name == "Ada"
        assert results[1] == Err(
            ["validate-design-type(age): Expected `int`, but got `undefined`"]
        )

    def test_empty_input(self) -> None:
        """No records should produce no results."""
        assert validate_records(Person, []) == []


class TestValidateDataFrame:
    """Test validate_dataframe function."""

    def test_basic_validation(self) -> None:
        """Valid rows should carry instances, invalid rows their errors."""
        df = pd.DataFrame({"name": [" Ada ", "Bob"], "age": [36, -1]})

        result = validate_dataframe(Person, df)

        assert list(result.columns) == ["is_valid", "errors", "instance"]
        assert result["is_valid"].tolist() == [True, True]
        assert result["instance"].iloc[0].name == "Ada"
        assert result["instance"].iloc[1].age == -1

    def test_invalid_rows_are_coerced(self) -> None:
        """Invalid rows should be reported without raising."""
        df = pd.DataFrame({"name": ["Ada", ""], "age": [36, 20]})

        result = validate_dataframe(Person, df)

        assert result["is_valid"].tolist() == [True, False]
        assert result["errors"].iloc[1] == [
            "min-length(name): Expected a length >= 1, but got 0"
        ]
        assert result["instance"].iloc[1] is None

    def test_missing_cells_are_absent_fields(self) -> None:
        """Missing values should read as absent, not as NaN."""
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [36, 40], "wallet": [None, None]})

        result = validate_dataframe(Person, df)

        assert result["is_valid"].tolist() == [True, True]
        assert result["instance"].iloc[0].wallet is UNDEFINED

    def test_preserves_index(self) -> None:
        """Output should be aligned on the input index."""
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [1, 2]}, index=["x", "y"])

        result = validate_dataframe(Person, df)

        assert result.index.tolist() == ["x", "y"]

    def test_raise_mode(self) -> None:
        """errors='raise' should raise on the first invalid row."""
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [1, "two"]})

        with pytest.raises(RyanDataClassValidationError) as exc_info:
            validate_dataframe(Person, df, errors="raise")

        assert exc_info.value.context["row"] == "1"
        assert exc_info.value.errors == [
            'validate-design-type(age): Expected `int`, but got `"two"`'
        ]

    def test_unknown_errors_mode(self) -> None:
        """Unsupported error modes should be rejected."""
        df = pd.DataFrame({"name": ["Ada"], "age": [1]})

        with pytest.raises(ValueError, match="Unsupported errors mode"):
            validate_dataframe(Person, df, errors="ignore")


class TestAccessor:
    """Test the DataFrame accessor."""

    def test_create(self) -> None:
        register_accessor()
        df = pd.DataFrame({"name": ["Ada"], "age": [36]})

        result = df.validated.create(Person)

        assert result["is_valid"].tolist() == [True]

    def test_instances(self) -> None:
        register_accessor()
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [36, 40]})

        people = df.validated.instances(Person)

        assert [person.name for person in people] == ["Ada", "Bob"]
        assert all(isinstance(person, Person) for person in people)

    def test_register_twice_is_harmless(self) -> None:
        register_accessor()
        register_accessor()

        assert hasattr(pd.DataFrame, "validated")
