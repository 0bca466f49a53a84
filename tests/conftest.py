import numpy as np
import pandas as pd
import pytest
from scipy.special import expit


@pytest.fixture
def exact_series():
    """x = 1..20, y = 100 / (1 + exp(-(0.5x - 6))), no noise."""
    x = np.arange(1, 21, dtype=float)
    return pd.DataFrame({"x": x, "y": 100 * expit(0.5 * x - 6)})


@pytest.fixture
def noisy_series():
    rng = np.random.default_rng(7)
    x = np.arange(0, 30, dtype=float)
    y = 250 * expit(0.4 * x - 5) + rng.normal(0, 4, size=x.size)
    return pd.DataFrame({"x": x, "y": np.clip(y, 1.0, None)})
