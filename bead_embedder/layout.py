"""
Force-directed bead layout

  1. Build the exclusion set once from chains and contacts
  2. Scatter beads uniformly in a cube of half-width target_radius * init_scale
  3. For each of n_iter iterations:
       a. Zero the force accumulator
       b. Attractive pass over backbone links and contacts
       c. Repulsive sweep over all other nearby pairs
       d. Forward-Euler update x += step * f
       e. Record mean squared force as a convergence diagnostic

There is no velocity or momentum; every iteration starts from the current
positions only. The run always covers n_iter iterations unless an early
exit threshold is passed explicitly
"""

import logging

import numpy as np

from .models import FdgOptions, build_exclusion_set
from .packing import random_positions, initial_half_width
from .forces import attractive_forces, repulsive_forces
from .geometry_utils import optimal_distance, squared_length, axpy

logger = logging.getLogger(__name__)


def log_progress(iteration, diagnostic):
    """Default progress reporter"""
    logger.info("%d iterations done (%.4f)", iteration, diagnostic)


def fdg_step(options, bead_map, exclusion):
    """
    Run one force-relaxation iteration in place

    Args:
        options: FdgOptions
        bead_map: BeadMap with positions set; positions are updated in place
        exclusion: ExclusionSet built from bead_map

    Returns:
        Mean squared force magnitude over all beads
    """
    x = bead_map.positions
    n = bead_map.n_beads
    att_radius = optimal_distance(options.target_radius, n)
    rep_radius = att_radius * options.r_rep
    forces = np.zeros((n, 3))

    attractive_forces(x, bead_map, att_radius, forces)
    n_rep = repulsive_forces(x, exclusion, rep_radius, options.k_rep, forces)

    total = 0.0
    for i in range(n):
        total += squared_length(forces[i])
        axpy(options.step, forces[i], x[i])

    if not np.all(np.isfinite(x)):
        raise FloatingPointError(
            "Bead positions became non-finite; check for degenerate geometry"
        )

    logger.debug("Step: %d repulsive pairs, rest distance %.4f", n_rep, att_radius)
    return total / n


def run_fdg(options, bead_map, rng, reporter=None, stop_below=None, init=True):
    """
    Embed a bead map in 3D by force-directed relaxation

    Args:
        options: FdgOptions (None for defaults)
        bead_map: BeadMap; bead_map.positions holds the result
        rng: numpy.random.Generator used for the initial positions
        reporter: Callable(iteration, diagnostic) called every
                  options.report_interval iterations. Defaults to logging
        stop_below: Optional diagnostic threshold for an early exit
        init: If False, start from the positions already in bead_map

    Returns:
        np.ndarray of per-iteration diagnostics
    """
    if options is None:
        options = FdgOptions()
    if reporter is None:
        reporter = log_progress

    exclusion = build_exclusion_set(bead_map)
    if init or bead_map.positions is None:
        bead_map.positions = random_positions(
            rng, bead_map.n_beads, initial_half_width(options)
        )

    logger.info(
        "Embedding %d beads (%d chains, %d contacts) for %d iterations",
        bead_map.n_beads, len(bead_map.chains), len(bead_map.contacts), options.n_iter,
    )

    diagnostics = []
    for iteration in range(options.n_iter):
        s = fdg_step(options, bead_map, exclusion)
        diagnostics.append(s)
        if iteration and iteration % options.report_interval == 0:
            reporter(iteration + 1, s)
        if stop_below is not None and s < stop_below:
            logger.info("Diagnostic %.4g below %.4g after %d iterations",
                        s, stop_below, iteration + 1)
            break

    return np.array(diagnostics)
