# grover_sim/config.py
import os
from dataclasses import dataclass, field
from typing import Optional

from .engine import BACKENDS, ROUNDING_MODES
from .state import MAX_QUBITS

class ConfigError(ValueError):
    """Invalid sweep configuration, detected before any simulation runs."""

def default_workers() -> int:
    return os.cpu_count() or 1

@dataclass(frozen=True)
class SweepConfig:
    # more qubits give better accuracy; at low counts the marked state is easily overshot
    min_qubits: int = 1
    max_qubits: int = 16
    attempts: int = 1000
    workers: int = field(default_factory=default_workers)
    seed: Optional[int] = None
    backend: str = "numpy"
    rounding: str = "nearest"

    def validate(self) -> "SweepConfig":
        if self.min_qubits < 1:
            raise ConfigError(f"min_qubits must be >= 1, got {self.min_qubits}")
        if self.max_qubits < self.min_qubits:
            raise ConfigError(f"max_qubits ({self.max_qubits}) is below min_qubits ({self.min_qubits})")
        if self.max_qubits > MAX_QUBITS:
            raise ConfigError(f"max_qubits ({self.max_qubits}) exceeds the supported maximum of {MAX_QUBITS}")
        if self.attempts <= 0:
            raise ConfigError(f"attempts must be > 0, got {self.attempts}")
        if self.workers <= 0:
            raise ConfigError(f"workers must be > 0, got {self.workers}")
        if self.backend not in BACKENDS:
            raise ConfigError(f"Unknown backend: {self.backend}")
        if self.rounding not in ROUNDING_MODES:
            raise ConfigError(f"Unknown rounding mode: {self.rounding}")
        return self

    @property
    def qubit_range(self) -> range:
        return range(self.min_qubits, self.max_qubits + 1)
