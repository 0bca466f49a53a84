import numpy as np
from typing import Any, Iterator, Optional, Tuple
import pandas as pd
from numpy.typing import ArrayLike, NDArray
from logistic_fitter.utils import read_input, read_params
from logistic_fitter.defence import (
    validate_input_source,
    validate_params_source,
    validate_series,
    validate_params,
)
from logistic_fitter.curve import (
    scale_response,
    projected_ymax,
    logistic,
    predict_curve,
    pseudo_r2,
    inflection_point,
)
from logistic_fitter.irls import LogitResult, fit_logit


class LogisticFitter:
    """
    Fit a two-parameter logistic curve Y = Ymax / (1 + exp(-(a * x + b)))
    to an observation series (e.g. qPCR fluorescence per cycle, or
    cumulative case counts per day).

    The response is scaled into (0, 1) by Ymax, then (a, b) are estimated by
    a binomial GLM with logit link. Ymax is the observed maximum unless a
    projected plateau is supplied, either directly or as
    ymax_factor * (response at the inflection point).
    """

    model_: LogitResult | None
    a_: float
    b_: float
    se_: NDArray[np.floating]
    z_: NDArray[np.floating]
    pvalues_: NDArray[np.floating]
    ymax_: float
    scaled_: NDArray[np.floating]
    fitted_: NDArray[np.floating]
    loglike_: float
    deviance_: float
    null_deviance_: float
    converged_: bool
    n_iter_: int
    r2_: float
    inflection_: Tuple[float, float]

    def __init__(
        self,
        input: pd.DataFrame | str,
        params: dict[str, Any] | str | None = None,
        ymax: float | None = None,
        inflection_value: float | None = None,
        ymax_factor: float = 2.0,
        clip: bool = False,
        max_iter: int = 25,
        tol: float = 1e-8,
    ) -> None:
        """
        Initialize the LogisticFitter.

        Input may be a DataFrame with 'x' and 'y' columns, a two-column
        table (predictor, response), or a file (txt, csv, tsv, xlsx, xls)
        containing the same structure.

        Parameters may be supplied directly, or via a dictionary or config
        file (yaml, yml, txt) containing ymax, inflection_value, ymax_factor,
        max_iter and tol.

        Args:
            input: Observation series or file path.
            params (dict | str | None): Optional parameter source overriding
                manual arguments.
            ymax (float | None): Projected plateau; None uses max(y).
            inflection_value (float | None): Response at the assumed
                inflection point, used to project Ymax when ymax is None.
            ymax_factor (float): Multiplier applied to inflection_value
                (default 2).
            clip (bool): Clip out-of-range scaled values instead of raising.
            max_iter (int): IRLS iteration budget (default 25).
            tol (float): IRLS convergence tolerance (default 1e-8).
        """

        validate_input_source(input)
        validate_params_source(params)

        # read input dataframe or file
        self.obj_df = read_input(input)
        # check input values
        validate_series(self.obj_df)

        if params is not None:
            # overide explicit arguments with input dict/file
            ymax, max_iter, tol, inflection_value, ymax_factor = read_params(
                params, ymax, max_iter, tol, inflection_value, ymax_factor
            )

        # check parameter values
        validate_params(ymax, max_iter, tol, ymax_factor)

        if ymax is None and inflection_value is not None:
            ymax = projected_ymax(inflection_value, ymax_factor)

        self.ymax = ymax
        self.inflection_value = inflection_value
        self.ymax_factor = ymax_factor
        self.clip = clip
        self.max_iter = max_iter
        self.tol = tol

    @property
    def x(self) -> NDArray[np.floating]:
        return self.obj_df["x"].to_numpy(dtype=float)

    @property
    def y(self) -> NDArray[np.floating]:
        return self.obj_df["y"].to_numpy(dtype=float)

    def scale(self) -> Tuple[NDArray[np.floating], float]:
        """
        Scale the stored responses into (0, 1).

        Returns:
            tuple: (scaled responses, Ymax used).
        """
        return scale_response(self.y, ymax=self.ymax, clip=self.clip)

    def fit(self, options: dict[str, Any] | None = None) -> "LogisticFitter":
        """
        Scale the responses and fit the logistic model by IRLS.

        Args:
            options (dict | None): Optional solver settings (max_iter, tol).

        Returns:
            self: The fitted LogisticFitter instance.
        """
        options = options or {}
        max_iter = options.get("max_iter", self.max_iter)
        tol = options.get("tol", self.tol)

        self.scaled_, self.ymax_ = self.scale()

        result = fit_logit(self.x, self.scaled_, max_iter=max_iter, tol=tol)

        self.model_ = result
        self.a_ = float(result.coef[0])
        self.b_ = float(result.coef[1])
        self.se_ = result.se
        self.z_ = result.z
        self.pvalues_ = result.pvalues
        self.fitted_ = result.fitted
        self.loglike_ = result.loglike
        self.deviance_ = result.deviance
        self.null_deviance_ = result.null_deviance
        self.converged_ = result.converged
        self.n_iter_ = result.n_iter

        return self

    def evaluate(self) -> Tuple[float, float, float]:
        """
        Compute goodness of fit and the inflection point of the fitted model.

        Returns:
            tuple: (pseudo_r2, x_inflection, y_inflection), with
            y_inflection on the original response scale.
        """
        r2 = pseudo_r2(self.scaled_, self.fitted_)
        x_star, y_star = inflection_point(self.a_, self.b_, self.ymax_)

        self.r2_ = r2
        self.inflection_ = (x_star, y_star)

        return r2, x_star, y_star

    def generate(self, options: dict[str, Any] | None = None) -> Tuple[float, ...]:
        """
        Fit the model and evaluate it.

        Args:
            options (dict): Optional fit settings.

        Returns:
            tuple: (a, b, pseudo_r2, x_inflection, y_inflection).
        """
        self.fit(options=options)
        r2, x_star, y_star = self.evaluate()

        return self.a_, self.b_, r2, x_star, y_star

    def predict(self, x: ArrayLike) -> NDArray[np.floating]:
        """Evaluate the fitted curve at x on the original response scale."""
        return logistic(x, self.a_, self.b_, self.ymax_)

    def curve(
        self, n_points: int = 200, x_min: Optional[float] = None, x_max: Optional[float] = None
    ) -> Iterator[Tuple[float, float]]:
        """Lazily yield (x, y) points of the fitted curve across the data range."""
        x_min = self.x.min() if x_min is None else x_min
        x_max = self.x.max() if x_max is None else x_max
        return predict_curve(self.a_, self.b_, self.ymax_, np.linspace(x_min, x_max, n_points))
