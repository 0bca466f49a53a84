import numpy as np
from dataclasses import dataclass
from numpy.typing import NDArray
from scipy.special import expit, logit, xlogy
from scipy.stats import norm
from logistic_fitter.defence import InvalidScale, NonConvergence

# keeps the IRLS weights mu * (1 - mu) away from zero
_EPS = 10 * np.finfo(float).eps


@dataclass(frozen=True)
class LogitResult:
    """
    Result of a binomial GLM fit with logit link.

    Coefficients are ordered (slope, intercept), i.e. (a, b) in
    P = 1 / (1 + exp(-(a * x + b))).
    """

    coef: NDArray[np.floating]
    se: NDArray[np.floating]
    z: NDArray[np.floating]
    pvalues: NDArray[np.floating]
    fitted: NDArray[np.floating]
    loglike: float
    deviance: float
    null_deviance: float
    n_iter: int
    converged: bool

    def __str__(self) -> str:
        lines = [
            "Binomial GLM (logit link), fitted by IRLS",
            f"{'':>10}{'Estimate':>12}{'Std. Error':>12}{'z value':>10}{'Pr(>|z|)':>12}",
        ]
        for name, c, s, z, p in zip(("a", "b"), self.coef, self.se, self.z, self.pvalues):
            lines.append(f"{name:>10}{c:>12.5f}{s:>12.5f}{z:>10.3f}{p:>12.4g}")
        lines.append(f"Null deviance: {self.null_deviance:.6g}  "
                     f"Residual deviance: {self.deviance:.6g}")
        lines.append(f"Log-likelihood: {self.loglike:.6g}  "
                     f"Fisher scoring iterations: {self.n_iter}")
        return "\n".join(lines)


def _loglike(y: NDArray[np.floating], mu: NDArray[np.floating]) -> float:
    return float(np.sum(xlogy(y, mu) + xlogy(1 - y, 1 - mu)))


def _deviance(y: NDArray[np.floating], mu: NDArray[np.floating]) -> float:
    # 0 * log(0) terms vanish, so responses of exactly 0 or 1 are fine
    dev = xlogy(y, y) - xlogy(y, mu) + xlogy(1 - y, 1 - y) - xlogy(1 - y, 1 - mu)
    return float(2 * np.sum(dev))


def fit_logit(
    x: NDArray[np.floating] | list[float],
    y: NDArray[np.floating] | list[float],
    max_iter: int = 25,
    tol: float = 1e-8,
) -> LogitResult:
    """
    Fit P(y) = expit(a * x + b) by iteratively reweighted least squares.

    Each response is treated as the success probability of a single
    Bernoulli trial, so the maximised quantity is the binomial
    log-likelihood sum(y log(mu) + (1 - y) log(1 - mu)). The iteration
    stops when the relative log-likelihood change drops below `tol`.

    Args:
        x (array-like): Predictor values.
        y (array-like): Responses in [0, 1].
        max_iter (int): Iteration budget (default 25).
        tol (float): Convergence tolerance (default 1e-8).

    Returns:
        LogitResult: Coefficients (a, b) with standard errors, z statistics
        and two-sided normal p-values.

    Raises:
        InvalidScale: If any response lies outside [0, 1].
        NonConvergence: If the iteration diverges or does not stabilise
            within `max_iter` iterations.
    """

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if np.any(y < 0) or np.any(y > 1):
        raise InvalidScale("Responses must lie in [0, 1] for a binomial fit.")

    X = np.column_stack([x, np.ones_like(x)])

    # Starting values as used by standard GLM software
    mu = (y + 0.5) / 2
    eta = logit(mu)
    ll_old = _loglike(y, mu)

    converged = False
    n_iter = 0
    for n_iter in range(1, max_iter + 1):
        w = mu * (1 - mu)
        # working response
        z = eta + (y - mu) / w

        XtW = X.T * w
        try:
            coef = np.linalg.solve(XtW @ X, XtW @ z)
        except np.linalg.LinAlgError as e:
            raise NonConvergence(f"Singular weighted design at iteration {n_iter}.") from e

        if not np.all(np.isfinite(coef)):
            raise NonConvergence(f"Coefficients diverged at iteration {n_iter}.")

        eta = X @ coef
        mu = np.clip(expit(eta), _EPS, 1 - _EPS)
        ll = _loglike(y, mu)

        if abs(ll - ll_old) / (abs(ll) + 0.1) < tol:
            converged = True
            break
        ll_old = ll

    if not converged:
        raise NonConvergence(
            f"IRLS did not converge within {max_iter} iterations (tol={tol})."
        )

    w = mu * (1 - mu)
    try:
        cov = np.linalg.inv((X.T * w) @ X)
    except np.linalg.LinAlgError as e:
        raise NonConvergence("Information matrix is singular at the optimum.") from e

    se = np.sqrt(np.diag(cov))
    with np.errstate(divide="ignore", invalid="ignore"):
        zstat = coef / se
    pvalues = 2 * norm.sf(np.abs(zstat))

    ybar = np.full_like(y, y.mean())

    return LogitResult(
        coef=coef,
        se=se,
        z=zstat,
        pvalues=pvalues,
        fitted=mu,
        loglike=_loglike(y, mu),
        deviance=_deviance(y, mu),
        null_deviance=_deviance(y, ybar),
        n_iter=n_iter,
        converged=converged,
    )
