"""Vector3 arithmetic and distance helpers for bead coordinates

All functions operate on length-3 numpy arrays. Functions that modify an
argument do so in place, so they can be handed rows of a (n_beads, 3)
position or force array directly
"""

import math

import numpy as np

from .config import ZERO_LENGTH_EPS


def squared_length(x):
    """Squared Euclidean length of a 3-vector"""
    return float(x[0] * x[0] + x[1] * x[1] + x[2] * x[2])


def normalize(x):
    """
    Scale x to unit length in place

    A vector shorter than ZERO_LENGTH_EPS has no direction; it is set to zero
    and 0.0 is returned instead of dividing by zero

    Args:
        x: 3-vector, modified in place

    Returns:
        Original length of x
    """
    s = math.sqrt(squared_length(x))
    if s < ZERO_LENGTH_EPS:
        x[:] = 0.0
        return 0.0
    x *= 1.0 / s
    return s


def sub_normalize(a, b, out):
    """
    Unit direction from b to a

    Args:
        a, b: 3-vectors
        out: 3-vector receiving (a - b) / |a - b|

    Returns:
        Distance |a - b|
    """
    np.subtract(a, b, out=out)
    return normalize(out)


def add_to(x, y):
    """y += x"""
    y += x


def sub_from(x, y):
    """y -= x"""
    y -= x


def scale(a, x):
    """x *= a"""
    x *= a


def axpy(a, x, y):
    """y += a * x"""
    y += a * x


def optimal_distance(target_radius, n_beads):
    """
    Rest distance of an attractive link

    The sphere of radius target_radius is split into n_beads cells of equal
    volume; the rest distance is the side length of one such cell

    Args:
        target_radius: Radius of the whole arrangement
        n_beads: Number of beads sharing the volume

    Returns:
        ((4/3) * pi * R^3 / n) ** (1/3)
    """
    if n_beads < 1:
        raise ValueError(f"n_beads must be positive, got {n_beads}")
    v = 4.0 / 3.0 * math.pi * target_radius ** 3 / n_beads
    return v ** (1.0 / 3.0)
