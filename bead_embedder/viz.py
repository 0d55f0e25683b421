"""
Visualisation of a bead embedding

show_beads() draws:
  - Each chain as a polyline through its beads (each chain a random colour)
  - Beads as scatter points (same colour as their chain, grey if unchained)
  - Contacts as dashed grey lines between the linked beads
"""

import random

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.lines import Line2D
from mpl_toolkits.mplot3d.art3d import Line3DCollection


def random_hex_color():
    return f'#{random.randint(0, 0xFFFFFF):06x}'


def show_beads(bead_map, show_contacts=True, title=None, show=True):
    """
    Visualise the bead embedding in 3D

    Args:
        bead_map: BeadMap with positions
        show_contacts: If True, draw dashed lines for contact pairs
        title: Optional plot title
        show: If True, call plt.show()

    Returns:
        The matplotlib Figure
    """
    x = bead_map.positions
    if x is None:
        raise ValueError("Bead map has no positions to show")

    fig = plt.figure(figsize=(11, 8))
    ax = fig.add_subplot(111, projection='3d')

    colors = [random_hex_color() for _ in bead_map.chains]

    # Chains
    for (offset, count), color in zip(bead_map.chains, colors):
        pts = x[offset:offset + count]
        if count > 1:
            ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], color=color, linewidth=1.5)
        ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], color=color, s=15, alpha=0.75)

    unchained = [i for i in range(bead_map.n_beads) if bead_map.chain_of(i) < 0]
    if unchained:
        pts = x[unchained]
        ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], color='#999999', s=15, alpha=0.75)

    # Contacts
    if show_contacts and bead_map.contacts:
        segs = [[x[a], x[b]] for a, b in bead_map.contacts]
        lc = Line3DCollection(
            segs,
            colors=['#777777'] * len(segs),
            linewidths=1.0,
            linestyles='dashed',
            alpha=0.55
        )
        ax.add_collection(lc)

    lo = x.min(axis=0)
    hi = x.max(axis=0)
    pad = np.where(hi > lo, 0.0, 1.0)
    ax.set_xlim(lo[0] - pad[0], hi[0] + pad[0])
    ax.set_ylim(lo[1] - pad[1], hi[1] + pad[1])
    ax.set_zlim(lo[2] - pad[2], hi[2] + pad[2])

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(title or (
        f'Bead embedding: {bead_map.n_beads} beads, '
        f'{len(bead_map.chains)} chains, '
        f'{len(bead_map.contacts)} contacts'
    ))

    legend_elements = [
        Line2D([0], [0], color='grey', linewidth=1.5, label='Chain'),
        Line2D([0], [0], color='#777777', linewidth=1.0,
               linestyle='dashed', label='Contact'),
    ]
    ax.legend(handles=legend_elements, loc='upper left', fontsize=8)

    plt.tight_layout()
    if show:
        plt.show()
    return fig
