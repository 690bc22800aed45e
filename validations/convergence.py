from matplotlib import pyplot as plt
import numpy as np
import sys

from pathlib import Path

# Add the project root directory to the path (relative to this script's location)
script_dir = Path(__file__).parent
project_root = script_dir.parent
sys.path.insert(0, str(project_root))

from pyattitude.analysis import convergence_errors, estimate_order
from pyattitude.integration import IntegratorType, create

# Linearly varying body rate with a rotating axis
def rate_profile(t):
    return np.array([0.4 + 0.6 * t, -0.3 + 0.5 * t, 0.8 - 0.7 * t])

q0 = np.array([1.0, 0.0, 0.0, 0.0])
t_final = 2.0
step_counts = [5, 10, 20, 40, 80, 160, 320]
dt = t_final / np.array(step_counts, dtype=float)

for integrator_type in IntegratorType:
    integrator = create(integrator_type)
    errors = convergence_errors(integrator, rate_profile, t_final, step_counts, q0)
    order = estimate_order(step_counts[:4], errors[:4])
    print(f"{integrator_type.name:>13}: observed order {order:.2f}, error at dt={dt[-1]:.4f}: {errors[-1]:.3e}")
    plt.loglog(dt, errors, marker='o', label=f"{integrator_type.name} (p={order:.1f})")

plt.xlabel('dt [s]')
plt.ylabel('attitude error [rad]')
plt.title('Quaternion step integrators')
plt.grid(True, which='both', alpha=0.3)
plt.legend()
plt.show()
