# Configuration file for particle_terminal.py

# Display settings
BACKEND = "terminal"  # "terminal" or "window"
TICK_SECONDS = 0.034
UPPER_BLOCK = "▀"

# Window backend only: pixels per character cell
CELL_WIDTH = 8
CELL_HEIGHT = 16
WINDOW_COLUMNS = 120
WINDOW_ROWS = 40

# Recording settings
RECORD = False
OUTPUT_FILE = "simulation.mp4"
FRAME_LIMIT = 600

# Particle settings
DENSITY = 0.15
NUM_PARTICLES = None  # If None, will be calculated from DENSITY and the display area
SEED = None  # If None, every run is different

# Physics settings
GRAVITY_STRENGTH = 1.2
FRICTION_PER_SECOND = 0.7
SINGULARITY_GUARD = 0.2
IMPULSE_GAIN = 3.0

# Color settings
RED_SCALE = 0.8
GREEN_SCALE = 0.8
BLUE_LEVEL = 0.6

# Logging settings
LOG_FILE = "particle_terminal.log"
LOG_LEVEL = "INFO"
