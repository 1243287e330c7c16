"""
Error types raised outside the pure billing engine.
"""


class TariffScheduleError(ValueError):
    """Raised when a tariff document is missing or malformed."""
    pass


class PayloadError(ValueError):
    """Raised when a request body cannot be turned into a consumption payload."""
    pass
