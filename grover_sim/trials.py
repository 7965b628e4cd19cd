# grover_sim/trials.py
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Optional, Union

import numpy as np
from .config import SweepConfig
from .engine import GroverSearch, success_probability

Seed = Union[None, int, np.random.SeedSequence]

@dataclass
class QubitResult:
    n: int
    answer: int
    iterations: int
    hits: int
    attempts: int
    elapsed_s: float

    @property
    def accuracy(self) -> float:
        return self.hits / self.attempts * 100.0

    @property
    def expected(self) -> float:
        return success_probability(self.n, self.iterations) * 100.0

def _seed_sequence(seed: Seed) -> np.random.SeedSequence:
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)

def pick_answer(n_qubits: int, rng: np.random.Generator) -> int:
    """Uniform marked index in [1, 2^n - 2], keeping clear of both ends.

    For n = 1 that interval is empty and the answer is 1.
    """
    hi = (1 << n_qubits) - 2
    if hi < 1:
        return 1
    return int(rng.integers(1, hi, endpoint=True))

def warmup(backend: str):
    # one dummy run to JIT-compile before anything is timed
    GroverSearch(2, 1).run(backend=backend)

def run_trials(n_qubits: int, answer: int, attempts: int, workers: int = 1,
               seed: Seed = None, backend: str = "numpy", rounding: str = "nearest") -> int:
    """Run `attempts` independent trials and return how many hit `answer`.

    Every trial draws from its own Generator, spawned from `seed`, so the
    hit count for a given seed does not depend on `workers`.
    """
    search = GroverSearch(n_qubits, answer, rounding=rounding)
    seeds = _seed_sequence(seed).spawn(attempts)

    if workers == 1:
        return sum(search.trial(np.random.default_rng(s), backend=backend) for s in seeds)

    # at most `workers` trials in flight; a slot frees before its result is read
    gate = threading.BoundedSemaphore(workers)

    def job(s):
        try:
            return search.trial(np.random.default_rng(s), backend=backend)
        finally:
            gate.release()

    futures = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for s in seeds:
            gate.acquire()
            futures.append(pool.submit(job, s))
        # barrier: every trial for this qubit count resolves before we aggregate
        return sum(f.result() for f in futures)

def run_qubit_count(n_qubits: int, config: SweepConfig,
                    seed: Optional[np.random.SeedSequence] = None) -> QubitResult:
    ss = _seed_sequence(seed if seed is not None else config.seed)
    answer_seed, trial_seed = ss.spawn(2)
    answer = pick_answer(n_qubits, np.random.default_rng(answer_seed))

    t0 = time.perf_counter()
    hits = run_trials(n_qubits, answer, config.attempts, workers=config.workers,
                      seed=trial_seed, backend=config.backend, rounding=config.rounding)
    elapsed = time.perf_counter() - t0

    iterations = GroverSearch(n_qubits, answer, rounding=config.rounding).iterations
    return QubitResult(n=n_qubits, answer=answer, iterations=iterations,
                       hits=hits, attempts=config.attempts, elapsed_s=elapsed)

def sweep(config: SweepConfig) -> Iterator[QubitResult]:
    """Yield one QubitResult per qubit count, strictly in increasing order."""
    config.validate()
    qubits = config.qubit_range
    per_n = np.random.SeedSequence(config.seed).spawn(len(qubits))
    for n, ss in zip(qubits, per_n):
        yield run_qubit_count(n, config, seed=ss)
