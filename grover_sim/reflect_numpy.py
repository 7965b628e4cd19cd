# grover_sim/reflect_numpy.py
import numpy as np

def dot(a: np.ndarray, b: np.ndarray) -> float:
    assert a.shape == b.shape, f"length mismatch: {a.shape} vs {b.shape}"
    return float(np.dot(a, b))

def reflect_about(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Reflect v across the hyperplane orthogonal to the unit vector `axis`.

    Returns a new array; neither input is modified.
    """
    return v - 2.0 * dot(v, axis) * axis

def oracle(psi: np.ndarray, marked: np.ndarray) -> np.ndarray:
    # flips the sign of the marked component only
    return reflect_about(psi, marked)

def diffuse(psi: np.ndarray, uniform: np.ndarray) -> np.ndarray:
    # inversion about the mean: 2|s><s|psi> - psi
    return -reflect_about(psi, uniform)
