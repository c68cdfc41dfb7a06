"""Configuration settings for easycurves."""

# Numeric tolerances
CURVE_TOLERANCES = {
    "epsilon": 1e-9,  # Generic zero test (lengths, determinants, cross products)
    "parameter": 1e-7,  # Slack allowed outside a parameter domain before failing
    "continuity": 1e-6,  # Max gap between consecutive segments (drawing units)
    "solver_xtol": 1e-12,  # Absolute accuracy for the clothoid scale solver
    "solver_maxiter": 100,  # Max iterations for the clothoid scale solver
    "solver_samples": 64,  # Grid used to bracket the first clothoid scale root
}

# Radius from which a curve is considered straight
MAX_RADIUS = 1e20

# Cut-off for the clothoid arc length (in units of the scale parameter);
# past MAX_L * a the canonical spiral winds too tightly to be useful.
MAX_L = 2.23  # ~sqrt(5)

# Sampling defaults for exporters and plots
DEFAULT_SAMPLE_COUNT = 64
DEFAULT_STATION_STEP = 10.0  # drawing units between stations

# Polyline approximation of curves
FLATTEN_TOLERANCES = {
    "chord_tolerance": 0.01,  # Max deviation of a flattened polyline (drawing units)
    "min_step": 1e-3,  # Smallest sampling step along a curve
}

# Layer setup for DXF export
DXF_LAYERS = {
    "CURVE_LINES": {"color": 3, "linetype": "CONTINUOUS"},  # Green
    "CURVE_ARCS": {"color": 1, "linetype": "CONTINUOUS"},  # Red
    "CURVE_CLOTHOIDS": {"color": 2, "linetype": "CONTINUOUS"},  # Yellow
    "JUNCTIONS": {"color": 5, "linetype": "CONTINUOUS"},  # Blue
    "ANNOTATIONS": {"color": 4, "linetype": "CONTINUOUS"},  # Cyan
}

# Material colours (RGB, 0-1) for the Wavefront debug exporter
WAVEFRONT_MATERIALS = {
    "line": (0.0, 0.6, 0.0),
    "arc": (0.8, 0.1, 0.1),
    "clothoid": (0.9, 0.7, 0.0),
    "composed": (0.2, 0.4, 0.9),
    "marker": (0.3, 0.3, 0.3),
}
