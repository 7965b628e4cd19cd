# grover_sim/engine.py
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from .state import State, check_qubits

ROUNDING_MODES = ("nearest", "truncate")
BACKENDS = ("numpy", "numba")

# returned by sample_index when the cumulative scan never reaches u
NO_MEASUREMENT = -1

def get_backend(name: str):
    """Return the module implementing oracle/diffuse for `name`."""
    if name == "numpy":
        from . import reflect_numpy as ops
    elif name == "numba":
        try:
            from . import reflect_numba as ops
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
    else:
        raise ValueError(f"Unknown backend: {name}")
    return ops

def iteration_count(n_states: int, rounding: str = "nearest") -> int:
    """Optimal number of Grover iterations, pi/4 * sqrt(n_states)."""
    k = math.pi / 4.0 * math.sqrt(n_states)
    if rounding == "nearest":
        return int(round(k))
    if rounding == "truncate":
        return int(k)
    raise ValueError(f"Unknown rounding mode: {rounding}")

def success_probability(n_qubits: int, iterations: int) -> float:
    """Closed-form probability of measuring the marked state after `iterations`."""
    theta = math.asin(1.0 / math.sqrt(1 << n_qubits))
    return math.sin((2 * iterations + 1) * theta) ** 2

def probability_distribution(psi: np.ndarray) -> np.ndarray:
    probs = psi * psi
    # renormalise against drift accumulated over many reflections
    return probs / probs.sum()

def cumulative_distribution(probs: np.ndarray) -> np.ndarray:
    return np.cumsum(probs)

def sample_index(cum: np.ndarray, u: float) -> int:
    """First index i with cum[i] >= u, or NO_MEASUREMENT if there is none."""
    i = int(np.searchsorted(cum, u, side="left"))
    if i >= cum.shape[0]:
        return NO_MEASUREMENT
    return i

@dataclass
class GroverSearch:
    n_qubits: int
    answer: int
    rounding: str = "nearest"

    def __post_init__(self):
        check_qubits(self.n_qubits)
        if not 0 <= self.answer < self.n_states:
            raise ValueError(f"answer {self.answer} outside [0, {self.n_states - 1}]")
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding}")

    @property
    def n_states(self) -> int:
        return 1 << self.n_qubits

    @property
    def iterations(self) -> int:
        return iteration_count(self.n_states, self.rounding)

    def run(self, backend: str = "numpy", check_norm=False, check_norm_tol=1e-9,
            iterations: Optional[int] = None) -> State:
        """Evolve the uniform state through `iterations` Oracle+Diffusion rounds."""
        ops = get_backend(backend)
        uniform = State.uniform(self.n_qubits)
        marked = State.marked(self.n_qubits, self.answer)
        st = uniform.copy()

        k = self.iterations if iterations is None else iterations
        for _ in range(k):
            st.psi = ops.oracle(st.psi, marked.psi)
            st.psi = ops.diffuse(st.psi, uniform.psi)

        if check_norm:
            st.check_normalized(tol=check_norm_tol)
        return st

    def distribution(self, backend: str = "numpy") -> np.ndarray:
        return probability_distribution(self.run(backend=backend).psi)

    def measure(self, rng: np.random.Generator, backend: str = "numpy") -> int:
        cum = cumulative_distribution(self.distribution(backend=backend))
        return sample_index(cum, rng.random())

    def trial(self, rng: np.random.Generator, backend: str = "numpy") -> bool:
        # NO_MEASUREMENT is negative so it never equals a valid answer
        return self.measure(rng, backend=backend) == self.answer

def run_trial(n_qubits: int, answer: int, rng: np.random.Generator,
              backend: str = "numpy", rounding: str = "nearest") -> bool:
    return GroverSearch(n_qubits, answer, rounding=rounding).trial(rng, backend=backend)
