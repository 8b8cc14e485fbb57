"""
Spherical geometry and decibel helpers for directivity interpolation.

Angles are in radians. A direction is a (theta, phi) pair where theta is
the elevation-like angle and phi the azimuth-like angle of the source
frame.
"""
import math

import numpy as np


def angular_distance(theta: float, phi: float, other_theta: float, other_phi: float) -> float:
    """
    Great-circle angular separation between two directions.

    Uses the spherical law of cosines with phi in the latitude role and
    theta in the longitude role:

        acos(sin(phi) * sin(phi_o) + cos(phi) * cos(phi_o) * cos(theta - theta_o))

    The cosine is clamped to [-1, 1] so coincident directions give 0.0
    instead of a domain error from rounding.

    Args:
        theta: Theta of the first direction (radians)
        phi: Phi of the first direction (radians)
        other_theta: Theta of the second direction (radians)
        other_phi: Phi of the second direction (radians)

    Returns:
        Angular distance in radians (0 to pi)

    Example:
        >>> angular_distance(0.0, 0.0, math.pi / 2, 0.0)
        1.5707963267948966
    """
    cosine = (math.sin(phi) * math.sin(other_phi)
              + math.cos(phi) * math.cos(other_phi) * math.cos(theta - other_theta))
    return math.acos(max(-1.0, min(1.0, cosine)))


def db_to_w(db):
    """
    Convert decibels to linear power, 10 ** (dB / 10).

    Accepts a scalar or an array-like; array input returns a numpy array.
    """
    return np.power(10.0, np.asarray(db, dtype=float) / 10.0)


def w_to_db(w):
    """
    Convert linear power to decibels, 10 * log10(w).

    Accepts a scalar or an array-like; array input returns a numpy array.
    Zero power maps to -inf.
    """
    with np.errstate(divide='ignore'):
        return 10.0 * np.log10(np.asarray(w, dtype=float))
