"""Diagnostics package.

Command-line tables and plots over the public API; the scatter plot needs
the optional diagnostics extra (numpy, matplotlib).
"""

__all__ = ["easter_table", "pretty_month", "easter_scatter"]
