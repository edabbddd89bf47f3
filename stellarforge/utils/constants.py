"""Physical constants and generator configuration values."""

# Versions stamped into provenance
GENERATOR_VERSION = "1.4.0"
SCHEMA_VERSION = 3

# Fundamental constants (SI)
G = 6.67430e-11  # m^3 kg^-1 s^-2
STEFAN_BOLTZMANN = 5.670374419e-8  # W m^-2 K^-4

# Reference bodies
SOLAR_MASS = 1.98847e30  # kg
SOLAR_RADIUS = 6.957e8  # m
SOLAR_LUMINOSITY = 3.828e26  # W
SOLAR_TEMPERATURE = 5772.0  # K
SOLAR_AGE_YEARS = 4.6e9
EARTH_MASS = 5.9722e24  # kg
EARTH_RADIUS = 6.371e6  # m

# Distances and time
AU = 1.495978707e11  # m
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
SECONDS_PER_YEAR = 3.15576e7  # Julian year

# Tidal locking heuristic
TIDAL_INITIAL_ROTATION_S = 12.0 * SECONDS_PER_HOUR
TIDAL_Q_ROCKY = 100.0
TIDAL_K2_ROCKY = 0.3
TIDAL_Q_GASEOUS = 1.0e5
TIDAL_K2_GASEOUS = 0.5

# Rotation must differ from the orbital period by at least this fraction
# unless the body is tidally locked
MIN_ROTATION_ORBIT_SEPARATION = 0.01

# Fraction of planets that spin retrograde
RETROGRADE_SPIN_PROB = 0.08

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
