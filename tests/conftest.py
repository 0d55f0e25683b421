import itertools

import numpy as np
import pytest

from bead_embedder.models import BeadMap


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def two_chain_map():
    """Two chains of 5 and 4 beads plus one cross-chain contact and a free bead"""
    return BeadMap(10, chains=[(0, 5), (5, 4)], contacts=[(1, 7)])


@pytest.fixture
def brute_force_pairs():
    """All unordered pairs closer than radius, tested exhaustively"""
    def _pairs(x, radius, exclusion=None):
        found = set()
        for i, j in itertools.combinations(range(len(x)), 2):
            if exclusion is not None and (i, j) in exclusion:
                continue
            if np.sqrt(np.sum((x[i] - x[j]) ** 2)) < radius:
                found.add(frozenset((i, j)))
        return found
    return _pairs
