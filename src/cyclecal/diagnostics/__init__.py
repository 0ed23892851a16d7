"""Diagnostics package.

- cycle_lengths: period-length histogram of one cycle (numpy, optional matplotlib)
"""

__all__ = ["cycle_lengths"]
