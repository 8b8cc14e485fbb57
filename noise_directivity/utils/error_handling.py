"""
Input validation utilities for directivity data.

Provides decorators and helpers that reject malformed construction input
early, so the query path never has to.
"""
import inspect
from functools import wraps
from typing import List, Callable
import pandas as pd
import numpy as np
from noise_directivity.utils.logging_config import get_logger
from noise_directivity.utils.exceptions import DataValidationError

logger = get_logger(__name__)


def require_columns(required_cols: List[str], df_param: str = "df"):
    """
    Decorator to validate required columns exist in DataFrame.

    Parameters
    ----------
    required_cols : List[str]
        List of required column names
    df_param : str
        Name of the DataFrame parameter to check

    Raises
    ------
    DataValidationError
        If required columns are missing
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            df = kwargs.get(df_param)
            if df is None:
                sig = inspect.signature(func)
                param_names = list(sig.parameters.keys())
                if df_param in param_names:
                    param_idx = param_names.index(df_param)
                    if param_idx < len(args):
                        df = args[param_idx]

            if df is None:
                raise DataValidationError(f"DataFrame parameter '{df_param}' not found")

            if not isinstance(df, pd.DataFrame):
                raise DataValidationError(
                    f"Parameter '{df_param}' must be a pandas DataFrame, got {type(df)}"
                )

            missing_cols = set(required_cols) - set(df.columns)
            if missing_cols:
                raise DataValidationError(
                    f"Missing required columns in {df_param}: {sorted(missing_cols)}. "
                    f"Available columns: {sorted(map(str, df.columns.tolist()))}"
                )

            return func(*args, **kwargs)
        return wrapper
    return decorator


def validate_dataframe_not_empty(
    df: pd.DataFrame,
    name: str = "DataFrame"
) -> None:
    """
    Validate that DataFrame is not empty.

    Raises
    ------
    DataValidationError
        If DataFrame is empty
    """
    if len(df) == 0:
        raise DataValidationError(f"{name} is empty - no directivity samples to load")


def validate_finite_rows(
    df: pd.DataFrame,
    columns: List,
    df_name: str = "DataFrame"
) -> None:
    """
    Validate that the given columns hold only finite numbers.

    Raises
    ------
    DataValidationError
        If any row holds NaN, infinity or a non-numeric value
    """
    values = df[columns].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    bad_mask = ~np.isfinite(values).all(axis=1)
    invalid_rows = int(bad_mask.sum())
    if invalid_rows:
        raise DataValidationError(
            f"{df_name} holds non-finite values",
            invalid_rows=invalid_rows,
            details={'sample_rows': df.index[bad_mask].tolist()[:5]}
        )


def log_dataframe_summary(
    df: pd.DataFrame,
    name: str,
    include_columns: bool = True
) -> None:
    """
    Log summary statistics for a DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to summarize
    name : str
        Name for logging
    include_columns : bool
        Whether to log column names
    """
    log_data = {
        "dataframe": name,
        "rows": len(df),
        "columns": len(df.columns),
    }

    if include_columns:
        log_data["column_names"] = [str(c) for c in df.columns.tolist()]

    if len(df) > 0:
        log_data["memory_mb"] = df.memory_usage(deep=True).sum() / 1024 / 1024

    logger.debug("dataframe_summary", **log_data)

