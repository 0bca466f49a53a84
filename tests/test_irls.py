import pytest
import numpy as np
from scipy.optimize import minimize
from scipy.special import expit
from scipy.stats import norm

from logistic_fitter.irls import fit_logit
from logistic_fitter.defence import InvalidScale, NonConvergence


@pytest.mark.parametrize("a,b", [(0.5, -6.0), (-0.3, 2.0), (1.2, -3.0)])
def test_recovers_known_coefficients(a, b):
    x = np.linspace(0, 10 if abs(a) > 1 else 20, 25)
    y = expit(a * x + b)

    result = fit_logit(x, y)

    assert result.converged
    assert result.n_iter <= 25
    assert result.coef[0] == pytest.approx(a, abs=0.01)
    assert result.coef[1] == pytest.approx(b, abs=0.01)
    assert result.deviance == pytest.approx(0.0, abs=1e-6)
    assert np.allclose(result.fitted, y, atol=1e-5)


def test_matches_direct_likelihood_maximisation():
    rng = np.random.default_rng(0)
    x = np.linspace(0, 20, 40)
    y = np.clip(expit(0.4 * x - 5) + rng.normal(0, 0.05, x.size), 0.01, 0.99)

    X = np.column_stack([x, np.ones_like(x)])

    def nll(beta):
        mu = expit(X @ beta)
        return -np.sum(y * np.log(mu) + (1 - y) * np.log(1 - mu))

    def grad(beta):
        return -X.T @ (y - expit(X @ beta))

    ref = minimize(nll, np.zeros(2), jac=grad, method="BFGS", options={"gtol": 1e-10})
    result = fit_logit(x, y)

    assert np.allclose(result.coef, ref.x, atol=1e-3)
    assert result.loglike == pytest.approx(-ref.fun, rel=1e-6)


def test_inference_statistics():
    rng = np.random.default_rng(1)
    x = np.arange(1, 31, dtype=float)
    y = np.clip(expit(0.3 * x - 4) + rng.normal(0, 0.03, x.size), 0.001, 1.0)

    result = fit_logit(x, y)

    assert np.all(result.se > 0)
    assert np.allclose(result.z, result.coef / result.se)
    assert np.allclose(result.pvalues, 2 * norm.sf(np.abs(result.z)))
    assert np.all((result.pvalues >= 0) & (result.pvalues <= 1))
    assert result.null_deviance > result.deviance


def test_accepts_saturated_response():
    # the observed maximum scales to exactly 1
    x = np.arange(1, 21, dtype=float)
    y = expit(0.5 * x - 6)
    y = y / y.max()

    result = fit_logit(x, y)
    assert result.converged
    assert np.isfinite(result.loglike)


@pytest.mark.parametrize("bad", [[0.2, 0.5, 1.2], [-0.1, 0.5, 0.7]])
def test_rejects_out_of_range_response(bad):
    with pytest.raises(InvalidScale):
        fit_logit([1.0, 2.0, 3.0], bad)


def test_iteration_budget_exhausted():
    x = np.arange(1, 21, dtype=float)
    y = expit(0.5 * x - 6)

    with pytest.raises(NonConvergence):
        fit_logit(x, y, max_iter=1)


def test_summary_text():
    x = np.arange(1, 21, dtype=float)
    text = str(fit_logit(x, expit(0.5 * x - 6)))

    assert "Estimate" in text
    assert "Residual deviance" in text
    assert "Fisher scoring iterations" in text


def test_singular_weighted_design(monkeypatch):
    def singular(*args, **kwargs):
        raise np.linalg.LinAlgError("Singular matrix")

    monkeypatch.setattr(np.linalg, "solve", singular)
    x = np.arange(1, 21, dtype=float)

    with pytest.raises(NonConvergence, match="Singular weighted design"):
        fit_logit(x, expit(0.5 * x - 6))


def test_diverging_coefficients(monkeypatch):
    monkeypatch.setattr(np.linalg, "solve", lambda a, b: np.array([np.nan, 0.0]))
    x = np.arange(1, 21, dtype=float)

    with pytest.raises(NonConvergence, match="diverged"):
        fit_logit(x, expit(0.5 * x - 6))


def test_singular_information_at_optimum(monkeypatch):
    def singular(*args, **kwargs):
        raise np.linalg.LinAlgError("Singular matrix")

    monkeypatch.setattr(np.linalg, "inv", singular)
    x = np.arange(1, 21, dtype=float)

    with pytest.raises(NonConvergence, match="Information matrix"):
        fit_logit(x, expit(0.5 * x - 6))
