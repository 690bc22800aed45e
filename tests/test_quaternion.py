import numpy as np
from scipy.linalg import expm

from pyattitude.math.quaternion import (
    omega_exponential,
    omega_matrix,
    quat_conj,
    quat_derivative,
    quat_from_rotation_vector,
    quat_inv,
    quat_is_normalized,
    quat_multiply,
    quat_normalize,
    quat_to_euler,
)


def test_normalize_zero_quaternion_returns_identity():
    q = quat_normalize(np.zeros(4))
    assert np.allclose(q, [1.0, 0.0, 0.0, 0.0])


def test_normalize_does_not_modify_input():
    q = np.array([2.0, 0.0, 0.0, 0.0])
    qn = quat_normalize(q)
    assert np.allclose(qn, [1.0, 0.0, 0.0, 0.0])
    assert q[0] == 2.0
    assert quat_is_normalized(qn)


def test_multiply_by_inverse_is_identity():
    q = np.array([1.0, 2.0, 3.0, 4.0])
    product = quat_multiply(q, quat_inv(q))
    assert np.allclose(product, [1.0, 0.0, 0.0, 0.0], atol=1e-12)


def test_multiply_composes_rotations_about_same_axis():
    qa = quat_from_rotation_vector(np.array([0.0, 0.0, 0.2]))
    qb = quat_from_rotation_vector(np.array([0.0, 0.0, 0.5]))
    qc = quat_from_rotation_vector(np.array([0.0, 0.0, 0.7]))
    assert np.allclose(quat_multiply(qa, qb), qc, atol=1e-12)


def test_conjugate_keeps_scalar_part():
    assert np.allclose(quat_conj(np.array([1.0, 2.0, 3.0, 4.0])), [1.0, -2.0, -3.0, -4.0])


def test_derivative_matches_right_product_with_body_rate():
    rng = np.random.default_rng(3)
    q = quat_normalize(rng.normal(size=4))
    w = rng.normal(size=3)
    expected = 0.5 * quat_multiply(q, np.array([0.0, w[0], w[1], w[2]]))
    assert np.allclose(quat_derivative(q, w), expected, atol=1e-14)


def test_omega_matrix_is_skew_symmetric():
    omega = omega_matrix(np.array([0.3, -1.2, 2.5]))
    assert np.allclose(omega, -omega.T)
    # Omega(w)^2 = -|w|^2 I
    assert np.allclose(omega @ omega, -(0.3**2 + 1.2**2 + 2.5**2) * np.eye(4))


def test_omega_exponential_matches_matrix_exponential():
    rng = np.random.default_rng(11)
    for _ in range(20):
        w = rng.uniform(-4.0, 4.0, size=3)
        dt = rng.uniform(1e-3, 1.0)
        expected = expm(0.5 * dt * omega_matrix(w))
        assert np.allclose(omega_exponential(w, dt), expected, atol=1e-12)


def test_omega_exponential_small_angle_is_finite():
    w = np.array([1e-200, 0.0, -1e-200])
    a = omega_exponential(w, 0.01)
    assert np.all(np.isfinite(a))
    assert np.allclose(a, np.eye(4))


def test_rotation_vector_quarter_turn_about_z():
    q = quat_from_rotation_vector(np.array([0.0, 0.0, np.pi / 2]))
    assert np.allclose(q, [np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)])


def test_rotation_vector_tiny_angle_stays_finite():
    q = quat_from_rotation_vector(np.array([1e-20, 2e-20, 0.0]))
    assert np.all(np.isfinite(q))
    assert np.allclose(q, [1.0, 0.0, 0.0, 0.0])


def test_quat_to_euler_yaw_only():
    q = quat_from_rotation_vector(np.array([0.0, 0.0, 0.3]))
    assert np.allclose(quat_to_euler(q), [0.0, 0.0, 0.3], atol=1e-12)


def test_quat_to_euler_many_quaternions():
    qs = np.array([
        quat_from_rotation_vector(np.array([0.1, 0.0, 0.0])),
        quat_from_rotation_vector(np.array([0.0, 0.2, 0.0])),
    ])
    euler = quat_to_euler(qs)
    assert euler.shape == (2, 3)
    assert np.allclose(euler[0], [0.1, 0.0, 0.0], atol=1e-12)
    assert np.allclose(euler[1], [0.0, 0.2, 0.0], atol=1e-12)
