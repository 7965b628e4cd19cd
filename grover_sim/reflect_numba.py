# grover_sim/reflect_numba.py
import numpy as np
from numba import njit

# ---------- low-level kernels (Numba JIT) ----------
# nogil so trial worker threads run the kernels concurrently

@njit(nogil=True, fastmath=True)
def _dot_kernel(a, b):
    acc = 0.0
    for i in range(a.shape[0]):
        acc += a[i] * b[i]
    return acc

@njit(nogil=True, fastmath=True)
def _reflect_kernel(v, axis, sign):
    N = v.shape[0]
    proj = 2.0 * _dot_kernel(v, axis)
    out = np.empty(N, dtype=np.float64)
    for i in range(N):
        out[i] = sign * (v[i] - proj * axis[i])
    return out

# ---------- user-facing helpers ----------

def dot(a: np.ndarray, b: np.ndarray) -> float:
    assert a.shape == b.shape, f"length mismatch: {a.shape} vs {b.shape}"
    return float(_dot_kernel(a, b))

def reflect_about(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    assert v.shape == axis.shape, f"length mismatch: {v.shape} vs {axis.shape}"
    return _reflect_kernel(v, axis, 1.0)

def oracle(psi: np.ndarray, marked: np.ndarray) -> np.ndarray:
    return reflect_about(psi, marked)

def diffuse(psi: np.ndarray, uniform: np.ndarray) -> np.ndarray:
    assert psi.shape == uniform.shape, f"length mismatch: {psi.shape} vs {uniform.shape}"
    return _reflect_kernel(psi, uniform, -1.0)
