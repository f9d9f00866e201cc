"""Dining philosophers simulation: argument parsing, threaded run and command."""

__version__ = "1.0.0"
__all__ = ["args", "simulation", "cli"]