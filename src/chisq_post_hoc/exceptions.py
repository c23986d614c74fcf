"""
Errors raised while resolving the pieces of a chi-square post-hoc analysis.
"""


class UnresolvedStrategyError(ValueError):
    """Raised when a test strategy name does not resolve to a usable test."""


class UnresolvedCorrectionMethodError(ValueError):
    """Raised when a p-value correction method is not recognized."""
