"""Ridgepack physical and numerical constants.

Fixed values used throughout the ridging computations: densities of the
ice/snow/seawater column, gravitational acceleration, the slope angles of
ridge sails and keels, and the increments of the default discretization grids.
"""

# Physical constants
RHO_ICE: float = 917.0  # Density of sea ice [kg/m^3]
RHO_SNOW: float = 330.0  # Density of snow [kg/m^3]
RHO_WATER: float = 1026.0  # Density of seawater [kg/m^3]
GRAVITY: float = 9.8  # Gravitational acceleration [m/s^2]

# Ridge shape
RIDGE_ANGLE: float = 22.0  # Slope of the sail above sea level [deg]
KEEL_ANGLE: float = 22.0  # Slope of the keel below sea level [deg]

# Rubble compaction
COMPACTION_LENGTH: float = 0.06  # Work stored in the block skeleton per unit ice weight [m]

# Constant names in canonical order
CONSTANT_NAMES: tuple[str, ...] = (
    "rho_ice",
    "rho_snow",
    "rho_water",
    "gravity",
    "ridge_angle",
    "keel_angle",
    "compaction_length",
)

# Typical ranges, values outside only trigger a warning
TYPICAL_BOUNDS: dict[str, tuple[float, float]] = {
    "rho_ice": (880.0, 930.0),  # [kg/m^3]
    "rho_snow": (100.0, 500.0),  # [kg/m^3]
    "rho_water": (1000.0, 1035.0),  # [kg/m^3]
    "gravity": (9.78, 9.84),  # [m/s^2]
    "ridge_angle": (15.0, 35.0),  # [deg]
    "keel_angle": (15.0, 35.0),  # [deg]
    "compaction_length": (0.02, 0.2),  # [m]
}

# Default grids
MIN_THICKNESS: float = 0.0  # [m]
MAX_THICKNESS: float = 10.0  # [m]
THICKNESS_INCREMENT: float = 0.1  # [m]
POROSITY_INCREMENT: float = 0.01  # Energetics porosity axis step [-]
DISTRIBUTION_POROSITY_INCREMENT: float = 0.05  # g(h, phi) porosity step [-]
STRAIN_INCREMENT: float = 0.01  # [-]
MIN_STRAIN: float = -0.99  # Last strain of the default sweep [-]

# Ridged ice always carries some macroporosity, the zero-porosity
# column of g(h, phi) is reserved for undeformed ice.
MIN_RIDGE_POROSITY: float = 0.1  # [-]
MAX_RIDGE_POROSITY: float = 0.99  # [-]

# Empirical reference contours on the energy manifold
KEEL_DEPTH_COEFFICIENT: float = 16.0  # Melling and Riedel (1996) [m^0.5]
SAIL_HEIGHT_COEFFICIENT: float = 5.24  # Tucker et al. (1984) [m^0.5]
