"""Exceptions raised by the harmonic regression engine."""


class ForecastError(ValueError):
    """Base class for forecasting errors."""


class InvalidConfiguration(ForecastError):
    """Raised for a non-positive period, negative harmonics or negative horizon."""


class DimensionMismatch(ForecastError):
    """Raised when matrix and vector shapes disagree at a call boundary."""


class InsufficientData(ForecastError):
    """Raised for user-facing "not enough data" conditions during a fit."""


class SingularDesign(InsufficientData):
    """Raised when the design matrix is rank deficient or ill-conditioned."""


class InvalidObservations(ForecastError):
    """Raised when indices or observed values are NaN or infinite."""
