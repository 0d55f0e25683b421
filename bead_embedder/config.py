"""Configuration constants for force-directed bead embedding"""

# ---------------------------------------------------------------------------
# Geometric parameters
# ---------------------------------------------------------------------------

# Radius of the sphere the beads should fill. The attractive rest distance is
# the side of a cube whose volume is this sphere's volume divided by n_beads
TARGET_RADIUS = 10.0

# Repulsive radius as a multiple of the attractive rest distance
REPULSIVE_RADIUS_MULTIPLIER = 1.0

# Initial positions are drawn from a cube of half-width TARGET_RADIUS * INIT_SCALE
INIT_SCALE = 10.0

# Below this length a separation vector is treated as zero (coincident beads)
ZERO_LENGTH_EPS = 1e-10

# ---------------------------------------------------------------------------
# Force parameters
# ---------------------------------------------------------------------------

# Spring constant of repulsion. Attractive links always use ATTRACTIVE_COEFFICIENT
REPULSIVE_COEFFICIENT = 1.0
ATTRACTIVE_COEFFICIENT = 1.0

# ---------------------------------------------------------------------------
# Iteration parameters
# ---------------------------------------------------------------------------
N_ITERATIONS = 1000   # Always run in full unless an early exit is requested
STEP_SIZE = 0.01      # Forward-Euler step: x += STEP_SIZE * force

# Log the convergence diagnostic every REPORT_INTERVAL iterations
REPORT_INTERVAL = 10

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

# Verbosity 3 shows progress lines, 4 and above adds per-step details
DEFAULT_VERBOSITY = 3
LOG_FORMAT = '[%(asctime)s %(name)s] %(levelname)s: %(message)s'
