"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs independent replications (one seed each), and reports KPIs with
confidence intervals. A bar chart of mean average wait per scenario is saved
under experiments/output/.
"""

from __future__ import annotations
import copy, math, os
from statistics import mean, stdev
from typing import Callable, Dict, List, Tuple
from scipy.stats import t
from queuesim.config import apply_overrides, load_config
from queuesim.simulation import run_simulation
from .scenarios import SCENARIOS

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

def load_cfg() -> Dict:
    return load_config(os.path.join(ROOT, "config", "baseline.yaml"))

def mean_ci(values: List[float], confidence_level: float) -> Tuple[float, float]:
    """
    Return (mean, half-width) using a Student t critical value. A single
    replication has no spread estimate, so its half-width is 0.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    mu = mean(values)
    if n < 2:
        return mu, 0.0
    alpha = 1.0 - confidence_level
    tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, half

def series(results: List[Dict], extractor: Callable[[Dict], float]) -> List[float]:
    """Collect a numeric series from each replication summary."""
    return [float(extractor(res)) for res in results]

def run_scenario(cfg: Dict, scenario: Dict, replications: int) -> List[Dict]:
    """Run `replications` seeds of one scenario and return their summaries."""
    base = apply_overrides(cfg, scenario["overrides"])
    first_seed = base.get("sim", {}).get("seed", 0)
    results = []
    for rep in range(replications):
        run_cfg = copy.deepcopy(base)
        run_cfg.setdefault("sim", {})["seed"] = first_seed + rep
        results.append(run_simulation(run_cfg).summary)
    return results

def plot_average_waits(rows: List[Dict]):
    """Persist a bar chart of mean average wait (with CI error bars) per scenario."""
    if not rows:
        return None
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    names = [r["name"] for r in rows]
    waits = [r["avg_wait"][0] for r in rows]
    errs = [r["avg_wait"][1] for r in rows]
    plt.figure(figsize=(8, 4.5))
    plt.bar(names, waits, yerr=errs, capsize=4, color="#2563eb")
    plt.ylabel("Average wait (time units)")
    plt.title("Average wait by scenario")
    plt.grid(True, axis="y", linestyle="--", alpha=0.4)
    out_dir = os.path.join(ROOT, "experiments", "output")
    os.makedirs(out_dir, exist_ok=True)
    out_path = os.path.join(out_dir, "average_wait_by_scenario.png")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path

def main():
    """Entry point: drive all scenarios and replications, report KPIs."""
    cfg = load_cfg()
    exp_cfg = cfg.get("experiments", {})
    replications = max(1, int(exp_cfg.get("replications", 1)))
    confidence = float(exp_cfg.get("confidence_level", 0.95))
    level_pct = confidence * 100.0

    rows = []
    for sc in SCENARIOS:
        results = run_scenario(cfg, sc, replications)
        avg_wait = mean_ci(series(results, lambda r: r["avg_wait"]), confidence)
        served = mean_ci(series(results, lambda r: r["served"]), confidence)
        left = mean_ci(series(results, lambda r: r["left"]), confidence)
        rests = mean_ci(series(results, lambda r: r["rests"]), confidence)
        rows.append({"name": sc["name"], "avg_wait": avg_wait})

        print(f"Scenario: {sc['name']} (replications={replications}, {level_pct:.1f}% CI)")
        print(f"  Avg wait: {avg_wait[0]:.3f} ± {avg_wait[1]:.3f}")
        print(f"  Served: {served[0]:.2f} ± {served[1]:.2f}")
        print(f"  Left: {left[0]:.2f} ± {left[1]:.2f}")
        print(f"  Rest periods: {rests[0]:.2f} ± {rests[1]:.2f}")
        print("-")

    plot_path = plot_average_waits(rows)
    if plot_path:
        print(f"Average wait plot saved to: {plot_path}")

if __name__ == "__main__":
    main()
