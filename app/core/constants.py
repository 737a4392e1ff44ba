"""
Installation heuristics used by the checklist generator.
"""

# Panels: every panel is assumed to be a 550 W module
PANEL_POWER_W = 550
PANEL_OPEN_CIRCUIT_VOLTAGE_V = 40  # approximate Voc used for string current

# Inverter sizing floor (kW), enforced by the API and re-applied by the generator
MIN_INVERTER_POWER_KW = 3.0
MAX_INVERTER_POWER_KW = 100.0

# Panel count limits per project
MIN_PANEL_COUNT = 1
MAX_PANEL_COUNT = 200

# Above this many panels the array is wired as 3 strings instead of 2
STRING_SPLIT_THRESHOLD = 8

# Cabling (metres)
DC_CABLE_M_PER_PANEL = 4.5
AC_CABLE_M_PER_KW = 2.5
AC_CABLE_RESERVE_M = 10
MIN_MC4_PAIRS = 3
STRING_FUSE_FACTOR = 1.25

# AC protection tiers: (upper bound in kW, rating); the last tier has no bound
BREAKER_TIERS_A = ((5.0, 32), (8.0, 40), (None, 50))
SURGE_PROTECTOR_TIERS_KA = ((5.0, 20), (15.0, 40), (None, 60))

# Grounding
GROUND_RODS_PER_STRING = 0.5
GROUND_CABLE_M_PER_PANEL = 2

# Mounting structure
RAIL_M_PER_PANEL = 2.1
FIXATION_POINTS_PER_PANEL = 1.2
TRAPEZOIDAL_CLAMP_FACTOR = 0.7
REINFORCEMENT_FACTOR = 0.3
PANELS_PER_GROUND_KIT = 6
GROUND_MOUNT_TILT_DEG = 20
FOUNDATIONS_PER_STRING = 2
