"""
Initial bead placement

Beads are scattered uniformly inside an axis-aligned cube centred on the
origin. The random stream is supplied by the caller, so a run is fully
reproducible from its seed
"""

import numpy as np


def initial_half_width(options):
    """Half-width of the cube initial positions are drawn from"""
    return options.target_radius * options.init_scale


def random_positions(rng, n_beads, half_width):
    """
    Draw n_beads positions uniformly from [-half_width, half_width]^3

    Three draws are consumed per bead, in x, y, z order

    Args:
        rng: numpy.random.Generator (anything with a random(size) method)
        n_beads: Number of beads
        half_width: Half side length of the cube

    Returns:
        np.ndarray shape (n_beads, 3)
    """
    u = np.asarray(rng.random((n_beads, 3)), dtype=float)
    return half_width * (2.0 * u - 1.0)
