# grover_sim/state.py
import numpy as np
from dataclasses import dataclass

# 2^24 float64 amplitudes is 128 MiB per vector; three live vectors per trial
MAX_QUBITS = 24

def check_qubits(n: int):
    if n < 1:
        raise ValueError(f"qubit count must be >= 1, got {n}")
    if n > MAX_QUBITS:
        raise ValueError(f"qubit count {n} exceeds the supported maximum of {MAX_QUBITS}")

@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), float64 amplitudes

    @staticmethod
    def uniform(n: int) -> "State":
        check_qubits(n)
        N = 1 << n
        return State(n=n, psi=np.full(N, 1.0 / np.sqrt(N), dtype=np.float64))

    @staticmethod
    def marked(n: int, answer: int) -> "State":
        """One-hot vector with a single 1 at basis index `answer`."""
        check_qubits(n)
        N = 1 << n
        if not 0 <= answer < N:
            raise ValueError(f"answer {answer} outside [0, {N - 1}]")
        psi = np.zeros(N, dtype=np.float64)
        psi[answer] = 1.0
        return State(n=n, psi=psi)

    @property
    def n_states(self) -> int:
        return self.psi.shape[0]

    def norm2(self) -> float:
        return float(np.dot(self.psi, self.psi))

    def check_normalized(self, tol=1e-9):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi
