from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from ryandata_class_validator.core.errors import RyanDataClassValidationError
from ryandata_class_validator.core.results import Result
from ryandata_class_validator.pipeline.engine import create_validated

if TYPE_CHECKING:
    import pandas as pd

RESULT_COLUMNS = ["is_valid", "errors", "instance"]


def validate_records(target: type, records: Iterable[Mapping[str, Any]]) -> list[Result]:
    """Validate each record against ``target``.

    Args:
        target: Class with registered pipelines.
        records: Mappings to validate, e.g. ``df.to_dict("records")``.

    Returns:
        One Result per record, in input order.
    """
    return [create_validated(target, record) for record in records]


def _is_missing(value: Any) -> bool:
    import pandas as pd

    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _strip_missing(record: dict[str, Any]) -> dict[str, Any]:
    # Missing cells count as absent fields rather than NaN values.
    return {key: value for key, value in record.items() if not _is_missing(value)}


def validate_dataframe(
    target: type,
    df: pd.DataFrame,
    *,
    errors: str = "coerce",
) -> pd.DataFrame:
    """Validate every row of a DataFrame against ``target``.

    Args:
        target: Class with registered pipelines.
        df: Input DataFrame; each row is one record, missing cells are
            treated as absent fields.
        errors: How to handle invalid rows ("raise" or "coerce").

    Returns:
        DataFrame with ``is_valid``, ``errors`` and ``instance`` columns,
        indexed like ``df``.

    Raises:
        RyanDataClassValidationError: If ``errors="raise"`` and a row fails.
        ValueError: If ``errors`` is not a supported mode.
    """
    import pandas as pd

    if errors not in {"raise", "coerce"}:
        raise ValueError(f"Unsupported errors mode: {errors}")

    rows: list[dict[str, Any]] = []
    # to_dict converts numpy scalars to native Python values.
    for index, record in zip(df.index, df.to_dict("records")):
        result = create_validated(target, _strip_missing(record))
        if result.is_err():
            if errors == "raise":
                raise RyanDataClassValidationError.from_errors(
                    target, result.value, {"row": str(index)}
                )
            rows.append({"is_valid": False, "errors": list(result.value), "instance": None})
        else:
            rows.append({"is_valid": True, "errors": [], "instance": result.value})

    return pd.DataFrame(rows, index=df.index, columns=RESULT_COLUMNS)


class ValidatedAccessor:
    """Pandas accessor for class validation.

    Usage:
        >>> from ryandata_class_validator.pandas_ext import register_accessor
        >>> register_accessor()
        >>> df = pd.DataFrame({"name": ["Test"], "age": [30]})
        >>> df.validated.create(Person)
    """

    def __init__(self, pandas_obj: pd.DataFrame) -> None:
        self._obj = pandas_obj

    def create(self, target: type, *, errors: str = "coerce") -> pd.DataFrame:
        """Validate the DataFrame's rows; see :func:`validate_dataframe`."""
        return validate_dataframe(target, self._obj, errors=errors)

    def instances(self, target: type) -> list[Any]:
        """Return validated instances, raising on the first invalid row."""
        return list(validate_dataframe(target, self._obj, errors="raise")["instance"])


def register_accessor(name: str = "validated") -> None:
    """Register the validation accessor on pandas DataFrames.

    After calling this, you can use:
        >>> df.validated.create(Person)

    Args:
        name: Name for the accessor (default: "validated").
    """
    import pandas as pd

    if not hasattr(pd.DataFrame, name):
        pd.api.extensions.register_dataframe_accessor(name)(ValidatedAccessor)
