from __future__ import annotations

"""
Small 3-vector helpers over numpy arrays.

All functions take anything array-like with 3 components and return float64
values. None of them raise on degenerate input: `normalize` of the zero
vector is the zero vector, and callers treat that as "no defined direction".
"""

from typing import Sequence, Union

import numpy as np


ArrayLike3 = Union[np.ndarray, Sequence[float]]


def as_vec3(v: ArrayLike3) -> np.ndarray:
    a = np.asarray(v, dtype=np.float64)
    if a.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {a.shape}")
    return a


def subtract(a: ArrayLike3, b: ArrayLike3) -> np.ndarray:
    return as_vec3(a) - as_vec3(b)


def add(a: ArrayLike3, b: ArrayLike3) -> np.ndarray:
    return as_vec3(a) + as_vec3(b)


def scale(v: ArrayLike3, s: float) -> np.ndarray:
    return as_vec3(v) * float(s)


def midpoint(a: ArrayLike3, b: ArrayLike3) -> np.ndarray:
    return add(a, b) / 2.0


def dot(a: ArrayLike3, b: ArrayLike3) -> float:
    a = as_vec3(a)
    b = as_vec3(b)
    # Explicit sum keeps the evaluation order fixed (x, y, z).
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: ArrayLike3, b: ArrayLike3) -> np.ndarray:
    """
    Right-handed cross product a x b.
    Anti-commutative; zero when a and b are parallel or either is zero.
    """
    return np.cross(as_vec3(a), as_vec3(b)).astype(np.float64, copy=False)


def norm(v: ArrayLike3) -> float:
    return float(np.sqrt(dot(v, v)))


def normalize(v: ArrayLike3) -> np.ndarray:
    """
    Unit vector along v, or the zero vector when |v| == 0.
    """
    v = as_vec3(v)
    n = norm(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n
