"""Force-directed 3D embedding of beads on chains with contact links"""

from .models import BeadMap, BeadPair, ExclusionSet, FdgOptions, build_exclusion_set
from .layout import fdg_step, run_fdg

__all__ = [
    "BeadMap",
    "BeadPair",
    "ExclusionSet",
    "FdgOptions",
    "build_exclusion_set",
    "fdg_step",
    "run_fdg",
]
