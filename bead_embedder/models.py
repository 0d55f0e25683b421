"""Data models for beads, chains, contacts and embedding options"""

import logging
from dataclasses import dataclass, fields
from typing import NamedTuple

import numpy as np
import networkx as nx

from .config import (
    TARGET_RADIUS,
    REPULSIVE_COEFFICIENT,
    REPULSIVE_RADIUS_MULTIPLIER,
    N_ITERATIONS,
    STEP_SIZE,
    INIT_SCALE,
    REPORT_INTERVAL,
)

logger = logging.getLogger(__name__)


class BeadPair(NamedTuple):
    """Ordered pair of bead indices"""
    a: int
    b: int

    def reversed(self):
        return BeadPair(self.b, self.a)


@dataclass(frozen=True)
class FdgOptions:
    """
    Immutable configuration of one embedding run

    Attributes
    ----------
    target_radius : float
        Radius of the sphere the beads should fill
    k_rep : float
        Repulsive spring constant
    r_rep : float
        Repulsive radius as a multiple of the attractive rest distance
    n_iter : int
        Number of force-relaxation iterations
    step : float
        Forward-Euler step size
    init_scale : float
        Initial cube half-width is target_radius * init_scale
    report_interval : int
        Iterations between progress reports
    """
    target_radius: float = TARGET_RADIUS
    k_rep: float = REPULSIVE_COEFFICIENT
    r_rep: float = REPULSIVE_RADIUS_MULTIPLIER
    n_iter: int = N_ITERATIONS
    step: float = STEP_SIZE
    init_scale: float = INIT_SCALE
    report_interval: int = REPORT_INTERVAL

    def __post_init__(self):
        if self.target_radius <= 0:
            raise ValueError(f"target_radius must be positive, got {self.target_radius}")
        if self.k_rep < 0:
            raise ValueError(f"k_rep must be non-negative, got {self.k_rep}")
        if self.r_rep <= 0:
            raise ValueError(f"r_rep must be positive, got {self.r_rep}")
        if self.n_iter < 0:
            raise ValueError(f"n_iter must be non-negative, got {self.n_iter}")
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.init_scale <= 0:
            raise ValueError(f"init_scale must be positive, got {self.init_scale}")
        if self.report_interval < 1:
            raise ValueError(f"report_interval must be >= 1, got {self.report_interval}")

    @classmethod
    def from_config(cls, cfg):
        """
        Build options from a plain config dict

        Missing keys fall back to the defaults in config.py

        Args:
            cfg: Dict whose keys are a subset of the FdgOptions field names

        Returns:
            FdgOptions
        """
        known = {f.name for f in fields(cls)}
        unknown = set(cfg) - known
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return cls(**cfg)


class BeadMap:
    """
    Beads laid out along chains, with extra contact links

    A chain is an (offset, count) run of consecutive bead indices in backbone
    order. Contacts are attractive links between arbitrary distinct beads.
    Positions are filled in by the initializer and updated in place by the
    force-directed layout

    Attributes
    ----------
    n_beads : int
        Total number of beads; indices are 0 .. n_beads-1
    chains : list[tuple]
        (offset, count) per chain
    contacts : list[BeadPair]
        Contact links, self pairs already removed
    positions : np.ndarray shape (n_beads, 3) or None
        Current coordinates
    """

    def __init__(self, n_beads, chains=(), contacts=()):
        """
        Args:
            n_beads: Number of beads
            chains: Iterable of (offset, count)
            contacts: Iterable of (bid0, bid1); pairs with bid0 == bid1 are dropped
        """
        if n_beads < 1:
            raise ValueError(f"A bead map needs at least one bead, got {n_beads}")
        self.n_beads = int(n_beads)
        self.chains = []
        self._chain_id = np.full(self.n_beads, -1, dtype=int)
        for offset, count in chains:
            self._add_chain(int(offset), int(count))

        self.contacts = []
        n_self = 0
        for bid0, bid1 in contacts:
            pair = BeadPair(int(bid0), int(bid1))
            self._check_bead(pair.a)
            self._check_bead(pair.b)
            if pair.a == pair.b:
                n_self += 1
                continue
            self.contacts.append(pair)
        if n_self:
            logger.warning("Dropped %d self contact pair(s)", n_self)

        self._positions = None

    @classmethod
    def from_chain_lengths(cls, lengths, contacts=()):
        """
        Build a bead map whose chains are laid out back to back

        Args:
            lengths: Number of beads in each chain
            contacts: Iterable of (bid0, bid1)
        """
        chains = []
        offset = 0
        for count in lengths:
            chains.append((offset, count))
            offset += count
        return cls(offset, chains, contacts)

    def _check_bead(self, bid):
        if not 0 <= bid < self.n_beads:
            raise ValueError(f"Bead index {bid} out of range [0, {self.n_beads})")

    def _add_chain(self, offset, count):
        if count < 1:
            raise ValueError(f"Chain at offset {offset} has no beads")
        if offset < 0 or offset + count > self.n_beads:
            raise ValueError(
                f"Chain ({offset}, {count}) does not fit in {self.n_beads} beads"
            )
        if np.any(self._chain_id[offset:offset + count] >= 0):
            raise ValueError(f"Chain ({offset}, {count}) overlaps an earlier chain")
        self._chain_id[offset:offset + count] = len(self.chains)
        self.chains.append((offset, count))

    # Positions

    @property
    def positions(self):
        return self._positions

    @positions.setter
    def positions(self, value):
        arr = np.array(value, dtype=float)
        if arr.shape != (self.n_beads, 3):
            raise ValueError(
                f"Expected positions of shape ({self.n_beads}, 3), got {arr.shape}"
            )
        self._positions = arr

    # Links

    def chain_of(self, bid):
        """Chain index of a bead, or -1 if it is on no chain"""
        self._check_bead(bid)
        return int(self._chain_id[bid])

    def backbone_links(self):
        """Yield (k, k+1) for every pair of chain-adjacent beads"""
        for offset, count in self.chains:
            for j in range(1, count):
                yield BeadPair(offset + j - 1, offset + j)

    def links(self):
        """Yield every attractive link: backbone links then contacts"""
        yield from self.backbone_links()
        yield from self.contacts

    def num_links(self):
        return sum(count - 1 for _, count in self.chains) + len(self.contacts)

    def build_graph(self):
        """
        Undirected NetworkX graph of all attractive links

        Nodes are bead indices; duplicate links collapse to one edge

        Returns:
            nx.Graph
        """
        G = nx.Graph()
        G.add_nodes_from(range(self.n_beads))
        G.add_edges_from(self.links())
        return G

    def __repr__(self):
        return (
            f"BeadMap("
            f"beads={self.n_beads}, "
            f"chains={len(self.chains)}, "
            f"contacts={len(self.contacts)})"
        )


class ExclusionSet:
    """
    Symmetric set of bead pairs exempt from repulsion

    Every attractive link (i, j) is stored as both (i, j) and (j, i), so a
    membership test never depends on argument order
    """

    def __init__(self, pairs=()):
        self._pairs = set()
        for a, b in pairs:
            self.add(a, b)

    def add(self, a, b):
        pair = BeadPair(a, b)
        self._pairs.add(pair)
        self._pairs.add(pair.reversed())

    def __contains__(self, pair):
        return BeadPair(*pair) in self._pairs

    def __len__(self):
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)


def build_exclusion_set(bead_map):
    """
    Collect all chain-adjacent and contact pairs of a bead map

    Args:
        bead_map: BeadMap

    Returns:
        ExclusionSet
    """
    excl = ExclusionSet()
    for pair in bead_map.backbone_links():
        excl.add(pair.a, pair.b)
    for pair in bead_map.contacts:
        if pair.a != pair.b:
            excl.add(pair.a, pair.b)
    logger.debug("Exclusion set holds %d ordered pairs", len(excl))
    return excl
