#!/usr/bin/env python3
"""
Command-line interface for LogisticFitter.

Usage example:
    python -m logistic_fitter.cli --input data/qpcr.csv --predictor Cycle --outfile fits.pdf
"""

import argparse
from typing import List, Optional
from logistic_fitter import LogisticFitter
from logistic_fitter.report import GenerateReport, CombinedReport
from logistic_fitter.defence import LogisticFitError, validate_output_path
from logistic_fitter.utils import read_multi_response_input


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="logistic_fitter",
        description="Fit logistic growth curves by binomial regression with a logit link.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--input",
        required=True,
        help=(
            "Path to the input dataset (CSV, TSV, XLSX, or XLS) with one "
            "predictor column and one or more response columns."
        ),
    )
    parser.add_argument(
        "--predictor",
        help="Name of the predictor column (default: first column).",
    )
    parser.add_argument(
        "--response",
        nargs="+",
        help="Response column(s) to fit (default: every non-predictor column).",
    )
    parser.add_argument(
        "--params",
        help=(
            "Optional path to a parameter file (YAML or key=value TXT) "
            "defining ymax, inflection_value, ymax_factor, max_iter and tol. "
            "Overrides manual CLI options if provided."
        ),
    )
    parser.add_argument(
        "--ymax",
        type=float,
        default=None,
        help="Projected plateau for unsaturated series (default: observed maximum).",
    )
    parser.add_argument(
        "--inflection_value",
        type=float,
        default=None,
        help="Response at the assumed inflection point; projects Ymax when --ymax is not given.",
    )
    parser.add_argument(
        "--ymax_factor",
        type=float,
        default=2.0,
        help="Multiplier applied to --inflection_value to project Ymax.",
    )
    parser.add_argument(
        "--clip",
        action="store_true",
        help="Clip scaled responses into (0, 1) instead of rejecting them.",
    )
    parser.add_argument(
        "--max_iter",
        type=int,
        default=25,
        help="IRLS iteration budget.",
    )
    parser.add_argument(
        "--tol",
        type=float,
        default=1e-8,
        help="IRLS convergence tolerance on the log-likelihood.",
    )
    parser.add_argument(
        "--outfile",
        help="Optional path to save results to a text or pdf file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed model information and parameters.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the LogisticFitter CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:

        data_dict = read_multi_response_input(
            args.input, predictor=args.predictor, responses=args.response
        )

        text = "\n\nLOGISTIC FIT RESULTS\n=====================================\n"
        text += f"predictor: {data_dict['predictor']}\n\n"

        reports = {}
        for col, subdf in data_dict["individual"].items():

            try:
                fitter = LogisticFitter(
                    input=subdf,
                    params=args.params,
                    ymax=args.ymax,
                    inflection_value=args.inflection_value,
                    ymax_factor=args.ymax_factor,
                    clip=args.clip,
                    max_iter=args.max_iter,
                    tol=args.tol,
                )
                result = fitter.generate()
            except (LogisticFitError, ValueError) as e:
                # one failed column does not stop the others
                text += f"{col}\n-------------------------------------\n"
                text += f"  {type(e).__name__}: {e}\n\n"
                continue

            rep = GenerateReport.from_fitter(fitter, result)
            reports[col] = rep
            text += rep.to_text(label=col, verbose=args.verbose)

        if args.outfile and reports:
            validate_output_path(args.outfile)
            if len(reports) == 1:
                name, report = next(iter(reports.items()))
                if args.outfile.endswith(".pdf"):
                    report.save_pdf(args.outfile, title=name)
                else:
                    report.write_out(args.outfile, label=name)
            else:
                combined = CombinedReport(args.outfile, reports)
                if args.outfile.endswith(".pdf"):
                    combined.save_pdf()
                else:
                    combined.write_out()
        elif args.outfile:
            text += f"No successful fits; nothing written to {args.outfile}\n"

        print(text)

    except Exception as e:
        print("Error", str(e))


if __name__ == "__main__":
    main()
