"""Diagnostics package.

Optional studies of the locator; needs the diagnostics extras
(numpy, scipy, matplotlib).
"""

__all__ = ["lunation_lengths", "locator_precision"]
