import dataclasses
import logging

import numpy as np
import pytest

from bead_embedder.models import (
    BeadMap,
    BeadPair,
    ExclusionSet,
    FdgOptions,
    build_exclusion_set,
)


# FdgOptions

def test_options_defaults():
    opt = FdgOptions()
    assert opt.target_radius == 10.0
    assert opt.k_rep == 1.0
    assert opt.r_rep == 1.0
    assert opt.n_iter == 1000
    assert opt.step == 0.01
    assert opt.init_scale == 10.0
    assert opt.report_interval == 10


def test_options_are_immutable():
    opt = FdgOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        opt.n_iter = 5


@pytest.mark.parametrize('bad', [
    {'target_radius': 0.0},
    {'k_rep': -1.0},
    {'r_rep': 0.0},
    {'n_iter': -1},
    {'step': 0.0},
    {'init_scale': -2.0},
    {'report_interval': 0},
])
def test_options_reject_invalid_values(bad):
    with pytest.raises(ValueError):
        FdgOptions(**bad)


def test_options_from_config():
    opt = FdgOptions.from_config({'n_iter': 50, 'step': 0.02})
    assert opt.n_iter == 50
    assert opt.step == 0.02
    assert opt.target_radius == 10.0


def test_options_from_config_rejects_unknown_keys():
    with pytest.raises(ValueError, match='velocity'):
        FdgOptions.from_config({'velocity': 1.0})


# BeadMap

def test_from_chain_lengths_lays_chains_back_to_back():
    m = BeadMap.from_chain_lengths([3, 4, 2], contacts=[(0, 8)])
    assert m.n_beads == 9
    assert m.chains == [(0, 3), (3, 4), (7, 2)]
    assert m.contacts == [BeadPair(0, 8)]
    assert m.chain_of(5) == 1


def test_backbone_links(two_chain_map):
    links = list(two_chain_map.backbone_links())
    assert links == [(0, 1), (1, 2), (2, 3), (3, 4), (5, 6), (6, 7), (7, 8)]
    assert two_chain_map.num_links() == 8


def test_unchained_bead(two_chain_map):
    assert two_chain_map.chain_of(9) == -1


def test_self_contacts_are_dropped(caplog):
    with caplog.at_level(logging.WARNING, logger='bead_embedder.models'):
        m = BeadMap(4, contacts=[(0, 0), (1, 3), (2, 2)])
    assert m.contacts == [BeadPair(1, 3)]
    assert 'Dropped 2 self contact' in caplog.text


@pytest.mark.parametrize('kwargs', [
    {'n_beads': 0},
    {'n_beads': 5, 'chains': [(3, 3)]},
    {'n_beads': 5, 'chains': [(0, 0)]},
    {'n_beads': 5, 'chains': [(0, 3), (2, 2)]},
    {'n_beads': 5, 'contacts': [(0, 5)]},
    {'n_beads': 5, 'contacts': [(-1, 2)]},
])
def test_invalid_bead_maps(kwargs):
    with pytest.raises(ValueError):
        BeadMap(**kwargs)


def test_positions_shape_is_checked(two_chain_map):
    with pytest.raises(ValueError):
        two_chain_map.positions = np.zeros((9, 3))
    two_chain_map.positions = np.zeros((10, 3))
    assert two_chain_map.positions.shape == (10, 3)


def test_build_graph(two_chain_map):
    G = two_chain_map.build_graph()
    assert G.number_of_nodes() == 10
    assert G.number_of_edges() == 8
    assert G.has_edge(7, 1)


# Exclusion set

def test_exclusion_set_is_symmetric(two_chain_map):
    excl = build_exclusion_set(two_chain_map)
    for a, b in two_chain_map.links():
        assert (a, b) in excl
        assert (b, a) in excl
    for pair in excl:
        assert pair.reversed() in excl
    assert len(excl) == 2 * two_chain_map.num_links()


def test_exclusion_set_only_holds_links(two_chain_map):
    excl = build_exclusion_set(two_chain_map)
    assert (0, 2) not in excl
    assert (4, 5) not in excl   # end of one chain, start of the next
    assert (9, 8) not in excl


def test_exclusion_set_deduplicates():
    excl = ExclusionSet([(1, 2), (2, 1), (1, 2)])
    assert len(excl) == 2
    assert BeadPair(2, 1) in excl
