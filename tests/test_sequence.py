import numpy as np
import pytest

from pyattitude import integrate_gyro_sequence
from pyattitude.integration import IntegratorType
from pyattitude.math.quaternion import quat_from_rotation_vector, quat_multiply


def _constant_rate_samples(w, t_final=1.0, rate_hz=100.0):
    t = np.arange(int(round(t_final * rate_hz)) + 1) / rate_hz
    return t, np.tile(w, (t.shape[0], 1))


def test_constant_rate_sequence_reaches_analytic_attitude():
    w = np.array([0.0, 0.0, np.pi / 2])
    t, rates = _constant_rate_samples(w)
    q = integrate_gyro_sequence(t, rates)
    expected = np.array([np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)])
    assert np.allclose(q, expected, atol=1e-6)


def test_sequence_starts_from_initial_attitude():
    w = np.array([0.3, -0.2, 0.5])
    t, rates = _constant_rate_samples(w, t_final=2.0)
    q0 = quat_from_rotation_vector(np.array([0.1, 0.7, -0.4]))
    q = integrate_gyro_sequence(t, rates, initial_attitude=q0, integrator_type=IntegratorType.YUAN)
    expected = quat_multiply(q0, quat_from_rotation_vector(w * 2.0))
    assert np.allclose(q, expected, atol=1e-10)


def test_unsorted_samples_are_sorted_by_timestamp():
    rng = np.random.default_rng(31)
    t = np.linspace(0.0, 1.0, 51)
    rates = rng.normal(scale=0.5, size=(51, 3))
    order = rng.permutation(51)
    q_sorted = integrate_gyro_sequence(t, rates, integrator_type="trawny")
    q_shuffled = integrate_gyro_sequence(t[order], rates[order], integrator_type="trawny")
    assert np.allclose(q_sorted, q_shuffled, atol=1e-14)


def test_history_holds_attitude_after_every_sample():
    w = np.array([0.0, 0.5, 0.0])
    t, rates = _constant_rate_samples(w, t_final=0.5)
    q0 = np.array([1.0, 0.0, 0.0, 0.0])
    history = integrate_gyro_sequence(t, rates, q0, "suh", return_history=True)
    assert history.shape == (t.shape[0], 4)
    assert np.allclose(history[0], q0)
    assert np.allclose(np.linalg.norm(history, axis=1), 1.0)
    final = integrate_gyro_sequence(t, rates, q0, "suh")
    assert np.allclose(history[-1], final)


def test_single_sample_returns_initial_attitude():
    q0 = np.array([0.0, 1.0, 0.0, 0.0])
    q = integrate_gyro_sequence([0.0], [[0.1, 0.2, 0.3]], initial_attitude=q0)
    assert np.allclose(q, q0)


def test_empty_sequence_returns_identity():
    q = integrate_gyro_sequence([], [])
    assert np.allclose(q, [1.0, 0.0, 0.0, 0.0])


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        integrate_gyro_sequence([0.0, 0.1, 0.2], np.zeros((2, 3)))


def test_wrong_rate_shape_rejected():
    with pytest.raises(ValueError):
        integrate_gyro_sequence([0.0, 0.1], np.zeros((2, 2)))


def test_repeated_timestamp_rejected():
    with pytest.raises(ValueError):
        integrate_gyro_sequence([0.0, 0.1, 0.1, 0.2], np.zeros((4, 3)))


def test_unknown_integrator_rejected():
    with pytest.raises(ValueError):
        integrate_gyro_sequence([0.0, 0.1], np.zeros((2, 3)), integrator_type="verlet")
