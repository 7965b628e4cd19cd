# grover_sim/tests/test_trials.py
import threading
import time
import numpy as np
import pytest
from grover_sim.config import SweepConfig
from grover_sim.engine import GroverSearch
from grover_sim.trials import QubitResult, pick_answer, run_qubit_count, run_trials, sweep

def test_pick_answer_range():
    rng = np.random.default_rng(0)
    for n in range(2, 9):
        hi = (1 << n) - 2
        answers = {pick_answer(n, rng) for _ in range(200)}
        assert min(answers) >= 1 and max(answers) <= hi

def test_pick_answer_covers_both_ends():
    rng = np.random.default_rng(1)
    answers = {pick_answer(3, rng) for _ in range(500)}
    assert answers == {1, 2, 3, 4, 5, 6}

def test_pick_answer_one_qubit():
    assert pick_answer(1, np.random.default_rng(0)) == 1

def test_pick_answer_two_qubits():
    rng = np.random.default_rng(2)
    assert {pick_answer(2, rng) for _ in range(100)} == {1, 2}

def test_run_trials_reproducible_across_workers():
    serial = run_trials(4, 6, 300, workers=1, seed=2024)
    pooled = run_trials(4, 6, 300, workers=4, seed=2024)
    assert serial == pooled
    assert 0 <= serial <= 300

def test_run_trials_seed_sequence():
    ss = np.random.SeedSequence(11)
    a = run_trials(3, 2, 100, seed=ss)
    b = run_trials(3, 2, 100, seed=np.random.SeedSequence(11))
    assert a == b

def test_one_qubit_accuracy_near_half():
    hits = run_trials(1, 1, 4000, workers=4, seed=7)
    assert 45.0 < hits / 4000 * 100 < 55.0

@pytest.mark.parametrize("n", [3, 4, 5])
def test_accuracy_above_ninety_percent(n):
    answer = (1 << n) // 2
    hits = run_trials(n, answer, 2000, workers=4, seed=n)
    assert hits / 2000 * 100 > 90.0

def test_trial_failure_propagates(monkeypatch):
    def boom(self, rng, backend="numpy"):
        raise RuntimeError("trial failed")
    monkeypatch.setattr(GroverSearch, "trial", boom)
    with pytest.raises(RuntimeError):
        run_trials(3, 2, 10, workers=2, seed=0)

def test_qubit_result_accuracy():
    r = QubitResult(n=3, answer=5, iterations=2, hits=473, attempts=500, elapsed_s=0.1)
    assert r.accuracy == pytest.approx(94.6)
    assert r.expected == pytest.approx(94.53, abs=0.01)

def test_run_qubit_count():
    cfg = SweepConfig(min_qubits=4, max_qubits=4, attempts=200, workers=2, seed=5)
    r = run_qubit_count(4, cfg)
    assert r.n == 4 and r.attempts == 200
    assert 1 <= r.answer <= 14
    assert r.iterations == 3
    assert r.elapsed_s >= 0.0
    again = run_qubit_count(4, cfg)
    assert (again.answer, again.hits) == (r.answer, r.hits)

def test_sweep_order_and_reproducibility():
    cfg = SweepConfig(min_qubits=1, max_qubits=5, attempts=100, workers=2, seed=42)
    first = list(sweep(cfg))
    second = list(sweep(cfg))
    assert [r.n for r in first] == [1, 2, 3, 4, 5]
    assert [(r.answer, r.hits) for r in first] == [(r.answer, r.hits) for r in second]

def test_sweep_truncate_rounding():
    cfg = SweepConfig(min_qubits=2, max_qubits=2, attempts=200, workers=1, seed=3, rounding="truncate")
    (r,) = sweep(cfg)
    # one iteration on four states lands exactly on the answer
    assert r.iterations == 1
    assert r.hits == 200

def test_sweep_validates_first():
    with pytest.raises(ValueError):
        next(sweep(SweepConfig(min_qubits=3, max_qubits=2)))

def test_in_flight_trials_bounded_by_workers(monkeypatch):
    lock = threading.Lock()
    counts = {"now": 0, "peak": 0}
    real_trial = GroverSearch.trial

    def counted(self, rng, backend="numpy"):
        with lock:
            counts["now"] += 1
            counts["peak"] = max(counts["peak"], counts["now"])
        try:
            time.sleep(0.002)
            return real_trial(self, rng, backend=backend)
        finally:
            with lock:
                counts["now"] -= 1

    monkeypatch.setattr(GroverSearch, "trial", counted)
    hits = run_trials(3, 2, 60, workers=3, seed=1)
    assert 0 <= hits <= 60
    assert 1 <= counts["peak"] <= 3
    assert counts["now"] == 0
