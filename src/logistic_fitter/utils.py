from typing import Any, Dict, Optional, Tuple
import pandas as pd
from pandas import DataFrame
import yaml
import os


def _load_table(data: Any, sheet_name: Optional[str] = None) -> DataFrame:
    """Load a DataFrame from a DataFrame, dict, array-like or file path."""

    if isinstance(data, pd.DataFrame):
        df = data.copy()

    elif isinstance(data, dict):
        df = pd.DataFrame.from_dict(data)

    elif isinstance(data, (list, tuple)) or hasattr(data, "__array__"):
        df = pd.DataFrame(list(data))

    elif isinstance(data, str):
        ext = os.path.splitext(data)[-1].lower()

        if ext == ".csv":
            df = pd.read_csv(data)
        elif ext in [".tsv", ".txt"]:
            df = pd.read_csv(data, sep=r"\s+")
        elif ext in [".xlsx", ".xls"]:
            val = pd.read_excel(data, sheet_name=sheet_name)
            if isinstance(val, dict):
                df = next(iter(val.values()))   # first sheet
            else:
                df = val
        else:
            raise ValueError(f"Unsupported file type: {ext}")

    else:
        raise ValueError("Input must be DataFrame, list, array, dict, or file path.")

    df.columns = [str(c).strip() for c in df.columns]
    return df


def _to_series(df: DataFrame, predictor: str, response: str) -> DataFrame:
    out = pd.DataFrame({
        "x": pd.to_numeric(df[predictor], errors="coerce"),
        "y": pd.to_numeric(df[response], errors="coerce"),
    })
    return out.reset_index(drop=True)


def read_input(
    data: DataFrame | list[Any] | tuple[Any, ...] | dict[str, Any] | str,
    sheet_name: Optional[str] = None,
) -> DataFrame:
    """
    Read a single observation series from a DataFrame, array of (x, y)
    pairs, dict, or file.

    A table with 'x' and 'y' columns is used as is; otherwise a
    two-column table is taken as (predictor, response) in that order.
    Non-numeric cells become NaN and are rejected later by validation.

    Returns:
        DataFrame with float columns:
            - x
            - y
    """

    df = _load_table(data, sheet_name=sheet_name)

    if {"x", "y"}.issubset(df.columns):
        return _to_series(df, "x", "y")

    if df.shape[1] != 2:
        raise ValueError(
            "Input must have 'x' and 'y' columns or exactly two columns "
            f"(predictor, response); got {list(df.columns)}."
        )

    return _to_series(df, df.columns[0], df.columns[1])


def _as_float(val: Any) -> Optional[float]:
    if val is None or (isinstance(val, str) and val.strip().lower() == "none"):
        return None
    return float(val)


def read_params(
    params: str | dict[str, Any],
    dflt_ymax: Optional[float],
    dflt_max_iter: int,
    dflt_tol: float,
    dflt_inflection: Optional[float] = None,
    dflt_factor: float = 2.0,
) -> Tuple[Optional[float], int, float, Optional[float], float]:
    """
    Read fit parameters from a file or dictionary, falling back to provided defaults.

    Args:
        params (str | dict): File path to a YAML or text parameter file,
            or a dictionary containing configuration values.
        dflt_ymax (float | None): Default Ymax (None uses the observed maximum).
        dflt_max_iter (int): Default IRLS iteration budget.
        dflt_tol (float): Default IRLS tolerance.
        dflt_inflection (float | None): Default response at the inflection point.
        dflt_factor (float): Default Ymax multiplier for inflection_value.

    Returns:
        tuple: (ymax, max_iter, tol, inflection_value, ymax_factor)

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If file type is unsupported.
        AssertionError: If input is not a valid file path or dictionary.
    """

    if isinstance(params, str):
        if not os.path.exists(params):
            raise FileNotFoundError(f"Parameter file not found: {params}")

        ext = os.path.splitext(params)[-1].lower()

        if ext in [".yaml", ".yml"]:
            with open(params, "r") as f:
                params = yaml.safe_load(f) or {}

        elif ext == ".txt":

            parsed: Dict[str, Any] = {}
            with open(params, "r") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    key, val = [x.strip() for x in line.split("=", 1)]
                    if key in ("ymax", "inflection_value"):
                        parsed[key] = None if val.lower() == "none" else float(val)
                    elif key in ("tol", "ymax_factor"):
                        parsed[key] = float(val)
                    elif key == "max_iter":
                        parsed[key] = int(val)
                    else:
                        parsed[key] = val
            params = parsed
        else:
            raise ValueError(f"Unsupported file type: {ext}")

    else:
        assert isinstance(
            params, dict
        ), "params must either be a file path or a dictionary"

    # YAML 1.1 reads exponents without a decimal point (1e-8) as strings
    ymax = _as_float(params.get("ymax", dflt_ymax))
    max_iter = params.get("max_iter", dflt_max_iter)
    if isinstance(max_iter, str):
        max_iter = int(max_iter)
    tol = _as_float(params.get("tol", dflt_tol))
    inflection_value = _as_float(params.get("inflection_value", dflt_inflection))
    ymax_factor = _as_float(params.get("ymax_factor", dflt_factor))

    return ymax, max_iter, tol, inflection_value, ymax_factor


def read_multi_response_input(
    data: DataFrame | dict[str, Any] | str,
    predictor: Optional[str] = None,
    responses: Optional[list[str]] = None,
    sheet_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Read a table with one predictor column and one or more response columns.

    The predictor defaults to the first column; responses default to every
    other column. Rows with an empty response cell are dropped from that
    column only.

    Returns a dict:
        {
            "predictor": name,
            "individual": {col: df_col}   # one (x, y) df per response column
        }
    """

    df = _load_table(data, sheet_name=sheet_name)

    if df.shape[1] < 2:
        raise ValueError("Input must contain a predictor column and at least one response column.")

    if predictor is None:
        predictor = df.columns[0]
    elif predictor not in df.columns:
        raise ValueError(f"Predictor column '{predictor}' not found in input.")

    if responses is None:
        responses = [c for c in df.columns if c != predictor]
    else:
        missing = [c for c in responses if c not in df.columns]
        if missing:
            raise ValueError(f"Missing response columns: {missing}")

    # blank response cells (e.g. ragged trailing rows) are dropped per column
    individual = {
        col: _to_series(df, predictor, col).dropna(subset=["y"]).reset_index(drop=True)
        for col in responses
    }

    return {"predictor": predictor, "individual": individual}
