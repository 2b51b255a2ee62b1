"""
Command-line entry point: run one simulation and print the trace.

    python -m queuesim --config config/baseline.yaml --seed 7
    echo "1 2 1 2 10 1.0 1.0 0.1 0.5 0.2" | python -m queuesim --stdin
"""

from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional
from .config import apply_overrides, load_config, parse_plain_values
from .errors import ConfigError
from .simulation import run_simulation

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="queuesim",
        description="Checkout queue discrete-event simulator (human servers + self-checkouts)",
    )
    parser.add_argument("--config", default=None, help="YAML config file (defaults built in)")
    parser.add_argument("--stdin", action="store_true",
                        help="read the ten plain values (seed servers self-checkouts capacity customers "
                             "arrival-rate service-rate rest-rate rest-prob greedy-prob) from stdin")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--customers", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for per-event debug")
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        cfg = parse_plain_values(sys.stdin.read()) if args.stdin else load_config(args.config)
        sim_overrides = {}
        if args.seed is not None:
            sim_overrides["seed"] = args.seed
        if args.customers is not None:
            sim_overrides["customers"] = args.customers
        if sim_overrides:
            cfg = apply_overrides(cfg, {"sim": sim_overrides})
        result = run_simulation(cfg)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(result.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
