import numpy as np
import pandas as pd
from typing import Any
from pandas import DataFrame
import os


class LogisticFitError(Exception):
    """Base class for errors raised while fitting a single logistic curve."""


class InvalidScale(LogisticFitError, ValueError):
    """Scaled responses fall outside (0, 1) or Ymax is not positive."""


class NonConvergence(LogisticFitError, RuntimeError):
    """The IRLS iteration did not stabilise within its iteration budget."""


class DegenerateModel(LogisticFitError, ValueError):
    """The fitted model cannot yield the requested quantity (e.g. a ~ 0)."""


def validate_input_source(input: str | DataFrame | dict[str, Any]) -> None:
    """
    Validate the input source for LogisticFitter.

    Args:
        input (str | pd.DataFrame | dict): Series data, file path or dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the input type is invalid.
    """

    if isinstance(input, pd.DataFrame):
        if input.shape[1] != 2 and not {"x", "y"}.issubset(input.columns):
            raise ValueError(
                "Input DataFrame must contain 'x' and 'y' columns "
                "or exactly two columns (predictor, response)."
            )
    elif isinstance(input, dict):
        if len(input) != 2 and not {"x", "y"}.issubset(input.keys()):
            raise ValueError("Input dictionary must contain 'x' and 'y' keys.")
    elif isinstance(input, str):
        if not os.path.exists(input):
            raise FileNotFoundError(f"Input file not found: {input}")
    elif isinstance(input, (list, tuple)) or hasattr(input, "__array__"):
        return
    else:
        raise ValueError(
            "Input must be a pandas DataFrame, dict, array of pairs or a valid file path."
        )


def validate_params_source(params: dict[str, Any] | str | None) -> None:
    """
    Pre-validate the params argument before attempting to read it.

    Raises:
        FileNotFoundError: If the provided file path does not exist.
        ValueError: If params is not a supported type.
    """

    if params is None or isinstance(params, dict):
        return

    if isinstance(params, str):
        if not os.path.exists(params):
            raise FileNotFoundError(f"Parameter file not found: {params}")
        return

    raise ValueError("params must be a dictionary, file path string, or None.")


def validate_series(df: DataFrame) -> None:
    """
    Validate an observation series.

    Args:
        df (DataFrame): Series with numeric 'x' and 'y' columns.

    Raises:
        ValueError: If the series is too short, non-finite, not strictly
            increasing in x, or has negative responses.
    """
    if df.empty:
        raise ValueError("Input DataFrame is empty.")

    if len(df) < 3:
        raise ValueError("At least 3 observations are required to fit a logistic curve.")

    x = df["x"].to_numpy(dtype=float)
    y = df["y"].to_numpy(dtype=float)

    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        bad = df.index[~(np.isfinite(x) & np.isfinite(y))].tolist()
        raise ValueError(f"Non-numeric or missing values found in rows: {bad}")

    if np.any(np.diff(x) <= 0):
        raise ValueError("Predictor values must be strictly increasing.")

    if np.any(y < 0):
        raise ValueError("Response values must be non-negative.")


def validate_params(
    ymax: float | None, max_iter: int, tol: float, ymax_factor: float = 2.0
) -> None:
    """
    Validate LogisticFitter configuration values.

    Raises:
        InvalidScale: If an explicit ymax is not a positive finite number.
        ValueError: If the solver settings are outside acceptable range.
    """

    if ymax is not None and (
        isinstance(ymax, bool) or not isinstance(ymax, (int, float)) or not np.isfinite(ymax) or ymax <= 0
    ):
        raise InvalidScale(f"ymax must be a positive number, got {ymax!r}.")

    if not isinstance(ymax_factor, (int, float)) or ymax_factor <= 1:
        raise ValueError("ymax_factor must be a number > 1.")

    if not isinstance(max_iter, int) or max_iter < 1:
        raise ValueError("max_iter must be a positive integer.")

    if not isinstance(tol, (int, float)) or tol <= 0:
        raise ValueError("tol must be a positive number.")


def validate_output_path(path: str) -> bool:
    """
    Checks if the given path is safe and writable, and that the file extension is .txt or .pdf.

    Returns True if valid, otherwise raises ValueError.
    """
    allowed_exts = (".txt", ".pdf")
    if not path.lower().endswith(allowed_exts):
        raise ValueError(f"File must end with {allowed_exts}, got '{path}'")

    directory = os.path.dirname(path) or "."

    if not os.path.exists(directory):
        raise ValueError(f"Directory does not exist: {directory}")

    if not os.access(directory, os.W_OK):
        raise PermissionError(f"No write permission in directory: {directory}")

    return True
