# grover_sim/plot_results.py
import csv, os, sys
import matplotlib.pyplot as plt
from collections import defaultdict
from statistics import median

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        r = csv.DictReader(f)
        for row in r:
            row["qubits"]   = int(row["qubits"])
            row["workers"]  = int(row["workers"])
            row["accuracy"] = float(row["accuracy"])
            row["expected"] = float(row["expected"])
            row["wall_ms"]  = float(row["wall_ms"])
            rows.append(row)
    return rows

def plot_accuracy_vs_qubits(rows, outdir, tag):
    by_n = {}
    for r in rows:
        by_n[r["qubits"]] = r  # last row per qubit count wins
    if not by_n:
        return None
    xs = sorted(by_n)
    plt.figure()
    plt.plot(xs, [by_n[n]["accuracy"] for n in xs], marker="o", label="measured")
    plt.plot(xs, [by_n[n]["expected"] for n in xs], ls="--", marker="x", label="sin²((2k+1)θ)")
    plt.xlabel("Qubits (n)")
    plt.ylabel("Accuracy (%)")
    plt.ylim(0, 105)
    plt.title(f"Accuracy vs Qubits [{tag}]")
    plt.grid(True)
    plt.legend()
    out = os.path.join(outdir, f"accuracy_vs_qubits_{tag}.png")
    plt.savefig(out, dpi=200)
    plt.close()
    return out

def plot_runtime_vs_workers(rows, outdir, tag):
    # group by workers and take median wall_ms
    buckets = defaultdict(list)
    for r in rows:
        buckets[r["workers"]].append(r["wall_ms"])
    if len(buckets) < 2:
        return None
    xs = sorted(buckets)
    ys = [median(buckets[w]) for w in xs]

    plt.figure()
    plt.plot(xs, ys, marker="o")
    plt.xlabel("Workers")
    plt.ylabel("Runtime (ms)")
    plt.title(f"Runtime vs Workers [{tag}]")
    plt.grid(True)
    out = os.path.join(outdir, f"runtime_vs_workers_{tag}.png")
    plt.savefig(out, dpi=200)
    plt.close()
    return out

def main(argv=None):
    paths = sys.argv[1:] if argv is None else argv
    if not paths:
        print("usage: python -m grover_sim.plot_results RESULTS.csv [...]")
        return 2

    for path in paths:
        tag = os.path.splitext(os.path.basename(path))[0]
        rows = load_rows(path)
        print(f"Plotting from {path} ({len(rows)} rows)...")
        outdir = os.path.dirname(path) or "."
        # a workers run varies the worker count, a sweep keeps it fixed
        if len({r["workers"] for r in rows}) > 1:
            out = plot_runtime_vs_workers(rows, outdir, tag)
        else:
            out = plot_accuracy_vs_qubits(rows, outdir, tag)
        if out:
            print(f"  saved {out}")
        else:
            print(f"  no rows to plot in {path}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
