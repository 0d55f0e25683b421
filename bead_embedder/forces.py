"""
Attractive and repulsive force passes

Both passes accumulate into a caller-owned (n_beads, 3) force array and use
the same spring law: a pair (i, j) at distance d with rest/cutoff radius r
and constant k receives k * (r - d) along the unit vector from j to i, added
to bead i and subtracted from bead j

Repulsion uses a sort-and-sweep over x with an ordered index over y:

  1. Sort bead indices by (x, index)
  2. Sweep left to right. Beads whose x is more than one repulsive radius
     behind the current bead leave the active set (monotone left pointer)
  3. The active set is a SortedList keyed by (y, index); the candidates for
     the current bead are the entries within one radius in y
  4. Candidates outside the z window, or linked by an attractive force,
     are skipped before the exact distance test
  5. The current bead joins the active set

Only pairs within one radius in every axis are ever measured, which keeps
the pass close to O(n log n) for well-spread beads
"""

import logging
import math

import numpy as np
from sortedcontainers import SortedList

from .geometry_utils import sub_normalize, scale, add_to, sub_from
from .config import ATTRACTIVE_COEFFICIENT

logger = logging.getLogger(__name__)


def apply_pair_force(x, i, j, k, radius, repel, forces):
    """
    Add the spring force between beads i and j to the accumulator

    Coincident beads have no separation direction; the force then acts
    along x, pushing the higher-indexed bead toward +x

    Args:
        x: (n_beads, 3) positions
        i, j: Distinct bead indices
        k: Spring constant
        radius: Rest distance (attractive) or cutoff radius (repulsive)
        repel: If True, pairs at or beyond radius are left untouched
        forces: (n_beads, 3) accumulator, modified in place

    Returns:
        Signed force magnitude applied (0.0 if skipped)
    """
    if i == j:
        raise ValueError(f"Cannot apply a pair force between bead {i} and itself")
    delta = np.empty(3)
    dist = sub_normalize(x[i], x[j], delta)
    if dist == 0.0:
        delta[:] = (1.0, 0.0, 0.0) if i > j else (-1.0, 0.0, 0.0)
    if repel and dist >= radius:
        return 0.0
    force = k * (radius - dist)
    scale(force, delta)
    add_to(delta, forces[i])
    sub_from(delta, forces[j])
    return force


def attractive_forces(x, bead_map, rest, forces, k=ATTRACTIVE_COEFFICIENT):
    """
    Pull every chain-adjacent and contact pair toward the rest distance

    Args:
        x: (n_beads, 3) positions
        bead_map: BeadMap supplying backbone links and contacts
        rest: Attractive rest distance
        forces: (n_beads, 3) accumulator, modified in place
        k: Spring constant of attractive links
    """
    for i, j in bead_map.backbone_links():
        apply_pair_force(x, i, j, k, rest, False, forces)
    for i, j in bead_map.contacts:
        if i != j:
            apply_pair_force(x, i, j, k, rest, False, forces)


def sweep_pairs(x, radius, exclusion=None):
    """
    Yield every non-excluded bead pair closer than radius

    Args:
        x: (n_beads, 3) positions
        radius: Cutoff distance
        exclusion: Optional ExclusionSet of pairs to skip

    Yields:
        (i, j) bead indices, where i comes after j in (x, index) order
    """
    coords = np.array(x, dtype=float)
    n = len(coords)
    if n < 2:
        return

    order = np.lexsort((np.arange(n), coords[:, 0]))
    active = SortedList()
    left = 0

    for pos in range(n):
        i = int(order[pos])
        xi, yi, zi = (float(c) for c in coords[i])

        # Evict beads that fell more than one radius behind in x
        x0 = xi - radius
        while left < pos and coords[order[left], 0] < x0:
            j = int(order[left])
            active.remove((float(coords[j, 1]), j))
            left += 1

        for _, j in active.irange((yi - radius, -1), (yi + radius, n)):
            dz = coords[j, 2] - zi
            if dz > radius or dz < -radius:
                continue
            if exclusion is not None and (i, j) in exclusion:
                continue
            dx = coords[j, 0] - xi
            dy = coords[j, 1] - yi
            if math.sqrt(dx * dx + dy * dy + dz * dz) < radius:
                yield i, j

        active.add((yi, i))


def repulsive_forces(x, exclusion, radius, k_rep, forces):
    """
    Push apart every non-excluded pair closer than the repulsive radius

    Args:
        x: (n_beads, 3) positions
        exclusion: ExclusionSet of attractive-linked pairs
        radius: Repulsive radius
        k_rep: Repulsive spring constant
        forces: (n_beads, 3) accumulator, modified in place

    Returns:
        Number of interacting pairs
    """
    n_pairs = 0
    for i, j in sweep_pairs(x, radius, exclusion):
        apply_pair_force(x, i, j, k_rep, radius, True, forces)
        n_pairs += 1
    return n_pairs
