"""Tests for the 3-vector helpers."""

import numpy as np
import pytest

from armswing.geometry.vec3 import (
    add,
    as_vec3,
    cross,
    dot,
    midpoint,
    norm,
    normalize,
    scale,
    subtract,
)


class TestBasicOps:

    def test_add_subtract(self):
        np.testing.assert_array_equal(add([1, 2, 3], [4, 5, 6]), [5.0, 7.0, 9.0])
        np.testing.assert_array_equal(subtract([1, 2, 3], [4, 5, 6]), [-3.0, -3.0, -3.0])

    def test_results_are_float64(self):
        assert add([1, 2, 3], [1, 1, 1]).dtype == np.float64
        assert isinstance(dot([1, 2, 3], [1, 1, 1]), float)

    def test_scale_and_midpoint(self):
        np.testing.assert_array_equal(scale([1, -2, 0.5], 2), [2.0, -4.0, 1.0])
        np.testing.assert_array_equal(midpoint([0, 0, 0], [2, 4, -6]), [1.0, 2.0, -3.0])

    def test_dot(self):
        assert dot([1, 2, 3], [4, 5, 6]) == 32.0
        assert dot([1, 0, 0], [0, 1, 0]) == 0.0

    def test_as_vec3_rejects_wrong_shape(self):
        with pytest.raises(ValueError, match="3-vector"):
            as_vec3([1, 2])
        with pytest.raises(ValueError):
            as_vec3([[1, 2, 3]])


class TestCross:

    def test_right_handed(self):
        np.testing.assert_array_equal(cross([1, 0, 0], [0, 1, 0]), [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(cross([0, 1, 0], [0, 0, 1]), [1.0, 0.0, 0.0])

    def test_anti_commutative(self):
        a = [0.3, -1.2, 2.5]
        b = [-0.7, 0.4, 1.1]
        np.testing.assert_allclose(cross(a, b), -cross(b, a))

    def test_parallel_and_zero_give_zero(self):
        np.testing.assert_array_equal(cross([1, 2, 3], [2, 4, 6]), [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(cross([1, 2, 3], [0, 0, 0]), [0.0, 0.0, 0.0])


class TestNormalize:

    def test_norm(self):
        assert norm([3, 4, 0]) == 5.0
        assert norm([0, 0, 0]) == 0.0

    def test_unit_length(self):
        u = normalize([3, 4, 12])
        assert norm(u) == pytest.approx(1.0)
        np.testing.assert_allclose(u, np.array([3, 4, 12]) / 13.0)

    def test_zero_vector_falls_back_to_zero(self):
        u = normalize([0, 0, 0])
        np.testing.assert_array_equal(u, [0.0, 0.0, 0.0])
        assert np.all(np.isfinite(u))
