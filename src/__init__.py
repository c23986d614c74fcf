"""
KNIME Extension entry point.

This module imports and registers the chi-square post-hoc comparisons node.
"""

from .chisq_post_hoc_node import ChiSquarePostHocNode

__all__ = ["ChiSquarePostHocNode"]
