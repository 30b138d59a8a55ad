import argparse
import json
import logging
from pathlib import Path

import numpy as np

from comparison import run_sequence
from config import REFERENCE_CHOICES, SimulationConfig, load_config
from constants import DEFAULT_X, DEFAULT_X0, DEFAULT_Y0
from equations import available
from errors import SimulationError


def decimal_places(dx: float) -> int:
    """Digits after the decimal point in dx, used to print x the way the step was given."""
    text = np.format_float_positional(float(dx), trim="-")
    return len(text.split(".")[1]) if "." in text else 0


def format_table(top_errors, places: int) -> str:
    rows = [f"{'x':>14}  {'error':>14}"]
    for x, err in top_errors:
        rows.append(f"{x:>14.{places}f}  {err:>14.10f}")
    return "\n".join(rows)


def build_parser() -> argparse.ArgumentParser:
    equations = ", ".join(f"{s.key.value}: {s.label}" for s in available())
    ap = argparse.ArgumentParser(
        description="Compare Euler against a reference solution of dy/dx = f(x, y)."
    )
    ap.add_argument("--equation", default="1", help=f"equation number or name ({equations})")
    ap.add_argument("--y0", type=float, default=DEFAULT_Y0)
    ap.add_argument("--x0", type=float, default=DEFAULT_X0)
    ap.add_argument("--dx", type=float, nargs="+", default=[None],
                    help="one or more step sizes, run in order and compared with the previous run")
    ap.add_argument("--X", type=float, default=DEFAULT_X, help="horizon")
    ap.add_argument("--precision", type=float, default=None, help="tolerance on the max error")
    ap.add_argument("--reference", choices=REFERENCE_CHOICES, default="rk4")
    ap.add_argument("--config", default=None, help="JSON file with the run parameters (overrides the flags above)")
    ap.add_argument("--out", default=None, help="write the last result bundle to this JSON file")
    ap.add_argument("--plot", action="store_true", help="show the figure for the last run")
    ap.add_argument("--save", default=None, help="save the figure for the last run")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def report(result) -> None:
    places = decimal_places(result.config.dx)
    print(f"\n=== dx = {result.config.dx:g} ===")
    print("trial count =", result.trial_count)
    print(format_table(result.top_errors, places))
    if result.previous_top_errors is not None:
        print("previous run:")
        print(format_table(result.previous_top_errors, places))
    print(f"zoom window = [{result.zoom.start_x:.{places}f}, {result.zoom.end_x:.{places}f}]")
    verdict = "PASS" if result.precision.passed else "FAIL"
    print(f"max error = {result.precision.max_error:.10f}  tolerance = {result.precision.tolerance:g}  {verdict}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config is not None:
            configs = [load_config(args.config)]
        else:
            configs = [
                SimulationConfig.from_inputs(
                    args.equation, y0=args.y0, x0=args.x0, dx=dx, X=args.X,
                    precision=args.precision, reference=args.reference,
                )
                for dx in args.dx
            ]
        results = run_sequence(configs)
    except (SimulationError, FileNotFoundError, json.JSONDecodeError) as e:
        print(f"error: {e}")
        return 2

    for result in results:
        report(result)

    last = results[-1]
    if args.out:
        Path(args.out).write_text(json.dumps(last.to_dict(), indent=2))
        print(f"\nWrote {args.out}")

    if args.plot or args.save:
        import matplotlib.pyplot as plt
        from plotting import plot_result

        fig = plot_result(last)
        if args.save:
            fig.savefig(args.save, dpi=150)
            print(f"Saved figure to {args.save}")
        if args.plot:
            plt.show()
        plt.close(fig)

    return 0 if all(r.precision.passed for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
