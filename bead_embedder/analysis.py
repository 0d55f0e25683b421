"""
Quality metrics for a finished bead embedding

These functions only read bead_map.positions; none of them feed back into
the layout. find_clashes uses a KD-tree so it doubles as an independent
check on the sweep used during relaxation
"""

import numpy as np
import networkx as nx
from scipy.spatial import cKDTree

from .models import FdgOptions, build_exclusion_set
from .geometry_utils import optimal_distance


def _require_positions(bead_map):
    if bead_map.positions is None:
        raise ValueError("Bead map has no positions; run the layout first")
    return bead_map.positions


def link_lengths(bead_map):
    """
    Euclidean length of every attractive link

    Returns:
        np.ndarray, backbone links first, then contacts
    """
    x = _require_positions(bead_map)
    pairs = np.array(list(bead_map.links()), dtype=int).reshape(-1, 2)
    if len(pairs) == 0:
        return np.zeros(0)
    return np.linalg.norm(x[pairs[:, 0]] - x[pairs[:, 1]], axis=1)


def link_length_summary(bead_map, options=None):
    """
    How closely links match the rest distance

    Args:
        bead_map: BeadMap with positions
        options: FdgOptions the layout was run with (None for defaults)

    Returns:
        Dict with rest, mean, std and max_rel_dev (max |d - rest| / rest).
        Values are nan when the map has no links
    """
    if options is None:
        options = FdgOptions()
    rest = optimal_distance(options.target_radius, bead_map.n_beads)
    lengths = link_lengths(bead_map)
    if len(lengths) == 0:
        return {'rest': rest, 'mean': np.nan, 'std': np.nan, 'max_rel_dev': np.nan}
    return {
        'rest':        rest,
        'mean':        float(np.mean(lengths)),
        'std':         float(np.std(lengths)),
        'max_rel_dev': float(np.max(np.abs(lengths - rest)) / rest),
    }


def find_clashes(bead_map, radius, exclusion=None):
    """
    Non-linked bead pairs closer than radius

    Args:
        bead_map: BeadMap with positions
        radius: Clash distance
        exclusion: ExclusionSet to skip; built from bead_map if None

    Returns:
        Sorted list of (i, j) with i < j
    """
    x = _require_positions(bead_map)
    if exclusion is None:
        exclusion = build_exclusion_set(bead_map)
    tree = cKDTree(x)
    pairs = tree.query_pairs(radius, output_type='ndarray')

    clashes = []
    for i, j in pairs:
        i, j = int(i), int(j)
        if (i, j) in exclusion:
            continue
        # query_pairs is inclusive at the radius; repulsion is not
        if np.linalg.norm(x[i] - x[j]) >= radius:
            continue
        clashes.append((min(i, j), max(i, j)))
    return sorted(clashes)


def radius_of_gyration(bead_map):
    """Root mean square distance of beads from their centroid"""
    x = _require_positions(bead_map)
    centred = x - x.mean(axis=0)
    return float(np.sqrt(np.mean(np.sum(centred ** 2, axis=1))))


def connected_components(bead_map):
    """
    Groups of beads joined by attractive links

    Returns:
        List of sets of bead indices, largest first
    """
    G = bead_map.build_graph()
    return sorted(nx.connected_components(G), key=len, reverse=True)


def summarize_embedding(bead_map, options=None):
    """
    Collect the main embedding metrics in one dict

    Rest distance and clash radius come from options, so pass the same
    FdgOptions the layout was run with

    Args:
        bead_map: BeadMap with positions
        options: FdgOptions (None for defaults)

    Returns:
        Dict with beads, links, components, radius_of_gyration, clashes,
        and the link_length_summary entries prefixed with 'link_'
    """
    if options is None:
        options = FdgOptions()
    rest = optimal_distance(options.target_radius, bead_map.n_beads)
    stats = {
        'beads':              bead_map.n_beads,
        'links':              bead_map.num_links(),
        'components':         len(connected_components(bead_map)),
        'radius_of_gyration': radius_of_gyration(bead_map),
        'clashes':            len(find_clashes(bead_map, rest * options.r_rep)),
    }
    for key, value in link_length_summary(bead_map, options).items():
        stats[f'link_{key}'] = value
    return stats
