from __future__ import annotations

import numpy as np

from armswing.geometry.vec3 import ArrayLike3, as_vec3, dot, normalize, scale, subtract


def project_onto_plane(v: ArrayLike3, normal: ArrayLike3) -> np.ndarray:
    """
    Component of v lying in the plane orthogonal to `normal`.

    v_proj = v - (v . n_unit) * n_unit

    A zero normal normalizes to the zero vector, so v is returned unchanged.
    """
    v = as_vec3(v)
    n_unit = normalize(normal)
    parallel = scale(n_unit, dot(v, n_unit))
    return subtract(v, parallel)
