import numpy as np
from typing import Optional
from numpy.typing import NDArray
import matplotlib.axes
import matplotlib.pyplot as plt
from logistic_fitter.curve import predict_curve


def plot_logistic_fit(
    x: NDArray[np.floating],
    y: NDArray[np.floating],
    a: float,
    b: float,
    ymax: float,
    x_inflection: Optional[float] = None,
    x_min: Optional[float] = None,
    x_max: Optional[float] = None,
    n_points: int = 300,
    xlabel: str = "x",
    ylabel: str = "Response",
    ax: Optional[matplotlib.axes.Axes] = None,
) -> matplotlib.axes.Axes:
    """
    Plot observations with the fitted logistic curve overlaid, marking the
    inflection point and the Ymax / 2 level.

    The curve may be extended past the observed range with x_min / x_max,
    e.g. to forecast a series that has not saturated yet.
    """

    x = np.asarray(x, float)
    y = np.asarray(y, float)

    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 3))

    lo = x.min() if x_min is None else x_min
    hi = x.max() if x_max is None else x_max
    if x_inflection is not None and np.isfinite(x_inflection) and x_max is None:
        # show the whole S-shape when the inflection lies beyond the data,
        # at most three times the observed span
        hi = max(hi, min(2 * x_inflection - lo, lo + 3 * (hi - lo)))

    ax.scatter(x, y, s=12, color="darkgrey", edgecolor="dimgrey", label="Observed", zorder=3)

    x_values, y_values = zip(*predict_curve(a, b, ymax, np.linspace(lo, hi, n_points)))
    ax.plot(x_values, y_values, "k--", lw=1.2, label="Model")

    if x_inflection is not None:
        ax.axvline(
            x=x_inflection,
            linestyle="--",
            color="blue",
            lw=1.0,
            label="Inflection",
        )
        ax.axhline(y=ymax / 2, linestyle=":", color="blue", lw=0.8)

    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)

    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(fontsize=7, frameon=False)

    return ax
