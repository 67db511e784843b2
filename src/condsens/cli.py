import argparse

from .doe import design
from .analyze import analyze, run
from .utils import write_params_template, DEFAULT_N_SAMPLES


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Atmospheric conductance uncertainty: LHS sampling and PRCC sensitivity."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # --- template ---
    p_tpl = sub.add_parser("template", help="Write a parameter template JSON file.")
    p_tpl.add_argument("--output", default="parameters_template.json",
                       help="Output path (default: parameters_template.json)")

    # --- design ---
    p_doe = sub.add_parser("design", help="Generate an LHS design from a parameter JSON file.")
    p_doe.add_argument("--params", required=True, help="Path to parameters JSON file.")
    p_doe.add_argument("--n-samples", type=int, default=0,
                       help="Number of samples (default: 10*n_params or 50).")
    p_doe.add_argument("--output", default=None, help="Output CSV path (default: DOE_<timestamp>.csv).")
    p_doe.add_argument("--seed", type=int, default=None, help="Random seed.")
    p_doe.add_argument("--response-cols", nargs="+", default=[],
                       help="Response column name(s) to add as empty columns in the design CSV.")

    # --- run ---
    p_run = sub.add_parser("run", help="Sample, evaluate the conductance model and report PRCC.")
    p_run.add_argument("--params", default=None,
                       help="Parameters JSON file (default: built-in distributions).")
    p_run.add_argument("--n-samples", type=int, default=DEFAULT_N_SAMPLES,
                       help=f"Number of LHS samples (default: {DEFAULT_N_SAMPLES}).")
    p_run.add_argument("--seed", type=int, default=None, help="Random seed.")
    p_run.add_argument("--out-dir", default="outputs", help="Output directory (default: outputs).")
    p_run.add_argument("--alpha", type=float, default=0.05,
                       help="Significance level for p-values and intervals (default: 0.05).")
    p_run.add_argument("--n-boot", type=int, default=0,
                       help="Bootstrap resamples for PRCC intervals (default: 0 = off).")
    p_run.add_argument("--no-plots", action="store_true", help="Skip plots.")

    # --- analyze ---
    p_ana = sub.add_parser("analyze", help="PRCC report for a filled design CSV.")
    p_ana.add_argument("--csv", required=True, help="Path to the filled design CSV.")
    p_ana.add_argument("--response-col", required=True, help="Response column to analyze.")
    p_ana.add_argument("--out-dir", default="outputs", help="Output directory (default: outputs).")
    p_ana.add_argument("--alpha", type=float, default=0.05,
                       help="Significance level for p-values and intervals (default: 0.05).")
    p_ana.add_argument("--n-boot", type=int, default=0,
                       help="Bootstrap resamples for PRCC intervals (default: 0 = off).")
    p_ana.add_argument("--seed", type=int, default=0, help="Bootstrap seed (default: 0).")
    p_ana.add_argument("--no-plots", action="store_true", help="Skip plots.")

    args = parser.parse_args(argv)

    if args.command == "template":
        write_params_template(path=args.output)
    elif args.command == "design":
        design(args.params, args.n_samples, args.output, seed=args.seed,
               response_cols=args.response_cols)
    elif args.command == "run":
        run(
            args.params,
            n_samples=args.n_samples,
            seed=args.seed,
            out_dir=args.out_dir,
            alpha=args.alpha,
            n_boot=args.n_boot,
            do_plots=not args.no_plots,
        )
    elif args.command == "analyze":
        analyze(
            args.csv,
            args.response_col,
            out_dir=args.out_dir,
            alpha=args.alpha,
            n_boot=args.n_boot,
            seed=args.seed,
            do_plots=not args.no_plots,
        )


if __name__ == "__main__":
    main()
