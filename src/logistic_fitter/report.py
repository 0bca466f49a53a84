from dataclasses import dataclass
from typing import Any, Tuple, Optional, Dict, cast
from matplotlib.figure import Figure
from numpy.typing import NDArray
import numpy as np
from matplotlib.backends.backend_pdf import PdfPages
from logistic_fitter.graphs import plot_logistic_fit
import matplotlib.pyplot as plt


@dataclass
class GenerateReport:
    """
    Container for logistic fit results and reporting utilities.

    Holds a reference to the fitted LogisticFitter so coefficients, standard
    errors and the data are read from one place.
    """

    fitter: Any
    r2: float
    inflection: Tuple[float, float]

    @classmethod
    def from_fitter(cls, fitter: Any, result: Tuple[Any, ...]) -> "GenerateReport":
        """
        Construct a GenerateReport from a LogisticFitter and generate() output.

        result = (a, b, r2, x_inflection, y_inflection)
        """
        _, _, r2, x_star, y_star = result

        return cls(fitter=fitter, r2=r2, inflection=(x_star, y_star))

    @property
    def coef(self) -> Tuple[float, float]:
        return (self.fitter.a_, self.fitter.b_)

    @property
    def se(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.fitter.se_)

    @property
    def z(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.fitter.z_)

    @property
    def pvalues(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.fitter.pvalues_)

    @property
    def ymax(self) -> float:
        return cast(float, self.fitter.ymax_)

    @property
    def model(self) -> Any:
        return getattr(self.fitter, "model_", None)

    def to_text(self, label: str | None = None, verbose: bool = False) -> str:
        """
        Produce the text summary of one fit.
        `label` is optional (e.g. response column name).
        """
        lines = []

        if label:
            lines.append(f"{label}")
            lines.append("-------------------------------------")

        lines.append(f"  {'':<3}{'Estimate':>11}{'Std.Err':>11}{'z':>9}{'p':>11}")
        for name, c, s, z, p in zip(("a", "b"), self.coef, self.se, self.z, self.pvalues):
            lines.append(f"  {name:<3}{c:>11.4f}{s:>11.4f}{z:>9.2f}{p:>11.3g}")

        lines.append("")
        lines.append(f"  Ymax: {self.ymax:.4f}")
        lines.append(f"  pseudo-R²: {self.r2:.4f}")
        lines.append(
            f"  inflection: x = {self.inflection[0]:.4f}, y = {self.inflection[1]:.4f}\n"
        )

        if verbose and self.model is not None:
            lines.append("")
            lines.append("--- Model details ---")
            lines.append(str(self.model))

        return "\n".join(lines) + "\n"

    def write_out(self, path: str, label: str | None = None) -> None:
        with open(path, "w") as f:
            f.write(self.to_text(label=label))

        print(f"\nResults saved to: {path}")

    def save_pdf(self, outfile: str, title: Optional[str] = None) -> None:
        with PdfPages(outfile) as pdf:
            fig = self._make_pdf(title)
            pdf.savefig(fig)
            plt.close(fig)

        print(f"PDF report saved to: {outfile}")

    def _make_pdf(self, title: Optional[str] = None) -> Figure:
        fig, (ax_plot, ax_text) = plt.subplots(
            nrows=1,
            ncols=2,
            figsize=(10, 4),
            gridspec_kw={"width_ratios": [2, 1]}
        )

        plot_logistic_fit(
            x=self.fitter.x,
            y=self.fitter.y,
            a=self.coef[0],
            b=self.coef[1],
            ymax=self.ymax,
            x_inflection=self.inflection[0],
            ax=ax_plot,
        )

        if title:
            ax_plot.set_title(title)

        ax_text.axis("off")

        text = self.to_text(label=None if title is None else title)

        ax_text.text(
            0.05,
            0.95,
            text,
            fontsize=10,
            va="top",
            family="monospace"
        )

        fig.tight_layout(rect=(0, 0, 1, 0.95))
        return fig


class CombinedReport:
    def __init__(
        self,
        outfile: str,
        reports: Dict[str, GenerateReport],
    ) -> None:
        """
        outfile: PDF or text filename
        reports: dict {response column name: GenerateReport}
        """
        self.outfile = outfile
        self.reports = reports

    def write_out(self) -> None:
        with open(self.outfile, "w") as f:
            for name, report in self.reports.items():
                f.write(report.to_text(label=name))
                f.write("\n")

        print(f"\nResults saved to: {self.outfile}")

    def save_pdf(self) -> None:
        with PdfPages(self.outfile) as pdf:
            for name, report in self.reports.items():
                fig = report._make_pdf(title=f"FIT: {name}")
                pdf.savefig(fig)
                plt.close(fig)

        print(f"Combined PDF saved to {self.outfile}")
