"""
Logistic Fitter: fit S-shaped growth curves Y = Ymax / (1 + exp(-(a*x + b)))
(qPCR fluorescence, cumulative case counts) by binomial regression with a
logit link.

Main API:
    from logistic_fitter import LogisticFitter
    fitter = LogisticFitter(input="qpcr.csv")
    a, b, r2, x_inflection, y_inflection = fitter.generate()

CLI:
    python -m logistic_fitter --input qpcr.csv --predictor Cycle
"""

from importlib.metadata import version, PackageNotFoundError

# --- Public API imports ---
from .core import LogisticFitter
from .defence import DegenerateModel, InvalidScale, LogisticFitError, NonConvergence

__all__ = [
    "LogisticFitter",
    "LogisticFitError",
    "InvalidScale",
    "NonConvergence",
    "DegenerateModel",
]

# --- Optional: version handling ---
try:
    __version__ = version("logistic_fitter")
except PackageNotFoundError:
    __version__ = "0.0.0"

# --- Optional: CLI hook for `python -m logistic_fitter` ---
def main():
    """Entry point for running logistic_fitter as a module (CLI)."""
    from .cli import main as cli_main
    cli_main()


if __name__ == "__main__":
    main()
