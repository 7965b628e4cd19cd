# grover_sim/cli.py
import argparse, csv, os, socket, time, platform
from dataclasses import replace
from datetime import datetime

from .config import SweepConfig, default_workers
from .engine import BACKENDS, ROUNDING_MODES
from .trials import run_qubit_count, sweep, warmup

def meta_row():
    return {
        "hostname": socket.gethostname(),
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
    }

HEADER = ["qubits","answer","iterations","attempts","hits","accuracy","expected","wall_ms",
          "backend","workers","rounding","hostname","timestamp","python"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, result, config):
    row = {
        "qubits": result.n, "answer": result.answer, "iterations": result.iterations,
        "attempts": result.attempts, "hits": result.hits,
        "accuracy": f"{result.accuracy:.4f}", "expected": f"{result.expected:.4f}",
        "wall_ms": f"{result.elapsed_s * 1e3:.3f}",
        "backend": config.backend, "workers": config.workers, "rounding": config.rounding,
    }
    row.update(meta_row())
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

def format_result(result, decimals=2) -> str:
    return f"{result.n} | {round(result.accuracy, decimals)}%"

# ---------------------------------------------------------------------
# commands

def cmd_sweep(config, csv_path=None, timing=True):
    print("Grover's Algorithm Simulation\n")
    print("Number of simulated qubits | Percentage accuracy")
    if csv_path:
        new_csv(csv_path)
    if config.backend == "numba":
        warmup(config.backend)

    t0 = time.perf_counter()
    for result in sweep(config):
        print(format_result(result), flush=True)
        if csv_path:
            write_row(csv_path, result, config)
    if timing:
        print(f"\nElapsed: {time.perf_counter() - t0:.2f} s")

def cmd_workers(config, n, workers_list, csv_path=None):
    print(f"[run] Worker scaling n={n} attempts={config.attempts} backend={config.backend}")
    if csv_path:
        new_csv(csv_path)
    warmup(config.backend)

    t1 = None
    for w in workers_list:
        cfg = replace(config, workers=w, min_qubits=n, max_qubits=n).validate()
        result = run_qubit_count(n, cfg)
        wall = result.elapsed_s * 1e3
        if t1 is None:
            t1 = wall
        speedup = t1 / wall if wall > 0 else float("nan")
        if csv_path:
            write_row(csv_path, result, cfg)
        print(f"  workers={w}  wall={wall:.2f} ms  speedup={speedup:.2f}x  accuracy={result.accuracy:.2f}%")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="grover-sim",
                                description="Classical simulation of Grover's search algorithm")
    sub = p.add_subparsers(dest="cmd", required=True)

    def common(sp):
        sp.add_argument("--attempts", type=int, default=1000, help="trials per qubit count")
        sp.add_argument("--seed", type=int, default=None)
        sp.add_argument("--backend", type=str, default="numpy", choices=list(BACKENDS))
        sp.add_argument("--rounding", type=str, default="nearest", choices=list(ROUNDING_MODES))
        sp.add_argument("--csv", type=str, default=None, help="write per-qubit results to this CSV")

    p_sweep = sub.add_parser("sweep", help="accuracy report over a range of qubit counts")
    p_sweep.add_argument("--min-qubits", type=int, default=1)
    p_sweep.add_argument("--max-qubits", type=int, default=16)
    p_sweep.add_argument("--workers", type=int, default=default_workers())
    p_sweep.add_argument("--no-timing", action="store_true", help="omit the elapsed-time line")
    common(p_sweep)

    p_workers = sub.add_parser("workers", help="time one qubit count across worker counts")
    p_workers.add_argument("--n", type=int, default=12)
    p_workers.add_argument("--workers", type=str, default="1,2,4,8")
    common(p_workers)

    return p

def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)

    try:
        if args.cmd == "sweep":
            config = SweepConfig(min_qubits=args.min_qubits, max_qubits=args.max_qubits,
                                 attempts=args.attempts, workers=args.workers, seed=args.seed,
                                 backend=args.backend, rounding=args.rounding).validate()
        else:
            workers_list = [int(x) for x in args.workers.split(",")]
            config = SweepConfig(min_qubits=args.n, max_qubits=args.n, attempts=args.attempts,
                                 seed=args.seed, backend=args.backend, rounding=args.rounding).validate()
            for w in workers_list:
                replace(config, workers=w).validate()
    except ValueError as e:  # ConfigError, or a malformed --workers list
        p.error(str(e))

    if args.cmd == "sweep":
        cmd_sweep(config, csv_path=args.csv, timing=not args.no_timing)
    elif args.cmd == "workers":
        cmd_workers(config, args.n, workers_list, csv_path=args.csv)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
