from numba import njit
import numpy as np

# Below this half-angle sin(x)/x is evaluated by its Taylor series.
SMALL_ANGLE = 1e-4


@njit
def quat_normalize(q: np.ndarray) -> np.ndarray:
    """
    Get a normalized version of this quaternion.

    Args:
        q: np.ndarray of shape (4,) or (4,1), scalar-first [w, x, y, z]

    Returns:
        A new normalized quaternion (original remains unchanged)
    """
    n = np.linalg.norm(q)
    if n == 0:
        # Return identity quaternion
        normalized_q = np.array([1.0, 0.0, 0.0, 0.0])
    else:
        normalized_q = q.flatten() / n
    return normalized_q


@njit
def quat_norm(q: np.ndarray) -> float:
    """Get the norm (magnitude) of the quaternion."""
    return np.linalg.norm(q)


@njit
def quat_is_normalized(q: np.ndarray) -> bool:
    """Check if the quaternion is normalized."""
    return np.abs(quat_norm(q) - 1.0) <= 1e-8


@njit
def quat_conj(q: np.ndarray) -> np.ndarray:
    """Get the conjugate of a quaternion."""
    q_flat = q.flatten()
    return np.array([q_flat[0], -q_flat[1], -q_flat[2], -q_flat[3]])


@njit
def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product q1 ⊗ q2 of two scalar-first quaternions."""
    a = q1.flatten()
    b = q2.flatten()
    return np.array([
        a[0] * b[0] - a[1] * b[1] - a[2] * b[2] - a[3] * b[3],
        a[0] * b[1] + a[1] * b[0] + a[2] * b[3] - a[3] * b[2],
        a[0] * b[2] - a[1] * b[3] + a[2] * b[0] + a[3] * b[1],
        a[0] * b[3] + a[1] * b[2] - a[2] * b[1] + a[3] * b[0]
    ])


@njit
def quat_inv(q: np.ndarray) -> np.ndarray:
    """Inverse of a quaternion is the conjugate divided by the norm squared."""
    return quat_conj(q) / (quat_norm(q)**2)


@njit
def omega_matrix(w: np.ndarray) -> np.ndarray:
    """The Omega(w) operator of an angular velocity.

    Args:
        w: np.ndarray of shape (3,), body angular velocity [rad/s]

    Output: np.ndarray of shape (4,4)
    Usage: dq/dt = 0.5 * omega_matrix(w) @ q, which equals 0.5 * q ⊗ (0, w)"""
    wx = w[0]
    wy = w[1]
    wz = w[2]
    return np.array([
        [0.0, -wx, -wy, -wz],
        [wx, 0.0, wz, -wy],
        [wy, -wz, 0.0, wx],
        [wz, wy, -wx, 0.0]
    ])


@njit
def quat_derivative(q: np.ndarray, w: np.ndarray) -> np.ndarray:
    """Time derivative of an attitude quaternion rotating at body rate w."""
    return 0.5 * (omega_matrix(w) @ q)


@njit
def half_angle_sinc(half_angle: float) -> float:
    """sin(x) / x, replaced by its Taylor series close to zero."""
    if half_angle > SMALL_ANGLE:
        return np.sin(half_angle) / half_angle
    return 1.0 - half_angle * half_angle / 6.0


@njit
def omega_exponential(w: np.ndarray, dt: float) -> np.ndarray:
    """Closed-form exp(0.5 * dt * Omega(w)).

    Since Omega(w)^2 = -|w|^2 I the series collapses to
    cos(theta/2) I + 0.5 * dt * sinc(theta/2) * Omega(w), theta = |w| dt.

    Output: np.ndarray of shape (4,4)"""
    half_angle = 0.5 * np.linalg.norm(w) * dt
    sinc = half_angle_sinc(half_angle)
    return np.cos(half_angle) * np.eye(4) + (0.5 * dt * sinc) * omega_matrix(w)


@njit
def quat_from_rotation_vector(v: np.ndarray) -> np.ndarray:
    """Rotation quaternion of a rotation vector (axis times angle)."""
    half_angle = 0.5 * np.linalg.norm(v)
    s = 0.5 * half_angle_sinc(half_angle)
    return np.array([np.cos(half_angle), s * v[0], s * v[1], s * v[2]])


def quat_to_rotmatrix(q: np.ndarray) -> np.ndarray:
    """Quaternion to body-to-reference rotation matrix."""
    w, x, y, z = quat_normalize(np.asarray(q, dtype=float))
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)]
    ])


def rotmatrix_to_euler321(A: np.ndarray) -> np.ndarray:
    """Rotation matrix to Euler angles (ZYX sequence for roll, pitch, yaw).

    Output: np.ndarray with [roll, pitch, yaw]
    """
    pitch = np.arcsin(np.clip(-A[2, 0], -1.0, 1.0))
    yaw = np.arctan2(A[1, 0], A[0, 0])
    roll = np.arctan2(A[2, 1], A[2, 2])
    return np.array([roll, pitch, yaw])


def quat_to_euler(q: np.ndarray) -> np.ndarray:
    """Quaternion to Euler angles (ZYX sequence for roll, pitch, yaw)"""
    q = np.asarray(q, dtype=float)
    # If q is a single quaternion (4,) or (4,1)
    if q.ndim == 1 or (q.ndim == 2 and q.shape[1] == 1):
        return rotmatrix_to_euler321(quat_to_rotmatrix(q.reshape(4)))

    # If q is an array of quaternions (N, 4)
    euler_angles = np.empty((q.shape[0], 3))
    for i in range(q.shape[0]):
        euler_angles[i] = rotmatrix_to_euler321(quat_to_rotmatrix(q[i]))

    return euler_angles
