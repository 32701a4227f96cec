"""hypercal: bounded parameter spaces, geometry and scoring for calibration heuristics."""

__version__ = "0.1.0"
