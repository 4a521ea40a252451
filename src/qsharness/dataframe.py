# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Convert execution results to tabular DataFrames.

Examples
--------
>>> from qsharness.dataframe import states_to_dataframe
>>> df = states_to_dataframe(result)
>>> df.columns
Index(['id', 'index', 'amplitude_real', 'amplitude_imaginary', 'probability'])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    import pandas as pd
    from qsharness.result import ExecutionResult

STATE_COLUMNS: list[str] = [
    "id",
    "index",
    "amplitude_real",
    "amplitude_imaginary",
    "probability",
]


def _require_pandas() -> Any:
    """Import pandas or raise a clear error."""
    try:
        import pandas

        return pandas
    except ImportError:
        raise ImportError(
            "pandas is required for DataFrame export. "
            "Install it with: pip install qsharness[dataframe]"
        ) from None


def states_to_dataframe(result: ExecutionResult) -> pd.DataFrame:
    """
    Return one row per basis state of ``result``.

    Parameters
    ----------
    result : ExecutionResult
        Result to convert.

    Returns
    -------
    pandas.DataFrame
        Columns :data:`STATE_COLUMNS`, rows in engine order. Empty (with
        the same columns) when the result has no states.
    """
    pd = _require_pandas()
    rows = [
        {
            "id": state.id,
            "index": state.index,
            "amplitude_real": state.amplitude_real,
            "amplitude_imaginary": state.amplitude_imaginary,
            "probability": state.probability,
        }
        for state in result.states
    ]
    return pd.DataFrame(rows, columns=STATE_COLUMNS)
