"""
Pure helpers for the logistic curve Y = Ymax / (1 + exp(-(a * x + b))).

Scaling a raw response into (0, 1), goodness of fit, the inflection
point, and evaluation of a fitted curve all live here; the IRLS solver
itself is in `logistic_fitter.irls`.
"""

import numpy as np
from typing import Iterable, Iterator, Optional, Tuple
from numpy.typing import ArrayLike, NDArray
from scipy.special import expit
from logistic_fitter.defence import DegenerateModel, InvalidScale

# smallest |a| for which -b/a is reported
SLOPE_EPS = 1e-10


def scale_response(
    y: ArrayLike,
    ymax: Optional[float] = None,
    clip: bool = False,
    eps: float = 1e-6,
) -> Tuple[NDArray[np.floating], float]:
    """
    Rescale a non-negative response series into the unit interval.

    Without an explicit `ymax` the observed maximum is used, so the largest
    observation maps to exactly 1 (the saturation point). A supplied
    `ymax` is a projected plateau for a series that has not saturated yet
    and must exceed every observation.

    Args:
        y (array-like): Non-negative responses.
        ymax (float | None): Projected maximum; defaults to max(y).
        clip (bool): Clip out-of-range values into [eps, 1 - eps] instead of
            raising.
        eps (float): Clipping margin.

    Returns:
        tuple: (scaled responses, ymax used).

    Raises:
        InvalidScale: If ymax <= 0 or a scaled value is <= 0, or >= 1 for an
            explicit ymax.
    """
    y = np.asarray(y, dtype=float)

    explicit = ymax is not None
    if ymax is None:
        ymax = float(np.max(y)) if y.size else 0.0

    if not np.isfinite(ymax) or ymax <= 0:
        raise InvalidScale(f"Ymax must be positive, got {ymax}.")

    scaled = y / ymax

    low = scaled <= 0
    high = scaled >= 1 if explicit else scaled > 1

    if np.any(low | high):
        if clip:
            upper = 1 - eps if explicit else 1.0
            return np.clip(scaled, eps, upper), ymax
        bad = np.flatnonzero(low | high).tolist()
        raise InvalidScale(
            f"Scaled responses must lie in (0, 1); offending positions: {bad} "
            f"(Ymax = {ymax:g}). Check the data or the choice of Ymax."
        )

    return scaled, ymax


def projected_ymax(inflection_value: float, factor: float = 2.0) -> float:
    """
    Project a plateau for a still-growing series from the response observed
    at (or assumed to be) the inflection point. A symmetric logistic curve
    reaches half its plateau at the inflection, hence the default factor 2;
    this is a modelling assumption, not a derived quantity.
    """
    if inflection_value <= 0:
        raise InvalidScale("The response at the inflection point must be positive.")
    return float(factor * inflection_value)


def logistic(
    x: ArrayLike, a: float, b: float, ymax: float = 1.0
) -> NDArray[np.floating]:
    """Evaluate ymax / (1 + exp(-(a * x + b)))."""
    return ymax * expit(a * np.asarray(x, dtype=float) + b)


def predict_curve(
    a: float, b: float, ymax: float, xs: Iterable[float]
) -> Iterator[Tuple[float, float]]:
    """Lazily yield (x, y) points on the fitted curve."""
    for x in xs:
        yield float(x), float(ymax * expit(a * x + b))


def pseudo_r2(actual: ArrayLike, predicted: ArrayLike) -> float:
    """
    Sum-of-squares pseudo-R², 1 - SSE / SST.

    Raises:
        DegenerateModel: If the actual values are constant (SST == 0).
    """
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if actual.shape != predicted.shape:
        raise ValueError("actual and predicted must have the same length.")

    sse = np.sum((actual - predicted) ** 2)
    sst = np.sum((actual - actual.mean()) ** 2)
    if sst == 0:
        raise DegenerateModel("Pseudo-R² is undefined for a constant response.")

    return float(1 - sse / sst)


def inflection_point(
    a: float, b: float, ymax: Optional[float] = None
) -> Tuple[float, Optional[float]]:
    """
    Return the inflection point (x*, y*) = (-b / a, ymax / 2).

    y* is None when no ymax is given.

    Raises:
        DegenerateModel: If |a| is below SLOPE_EPS.
    """
    if not np.isfinite(a) or abs(a) < SLOPE_EPS:
        raise DegenerateModel(f"Slope a = {a} is too close to zero for an inflection point.")

    x_star = -b / a
    y_star = None if ymax is None else ymax / 2
    return x_star, y_star
