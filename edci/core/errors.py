class EDCIError(Exception):
    """Base class for every error raised by the EDCI engine."""


class InvalidInputError(EDCIError, ValueError):
    """
    Raised by opt-in validation for negative counts, non-finite weights
    or inverted thresholds.
    """

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class AcquisitionError(EDCIError):
    """Raised when hospital census data cannot be obtained."""


class UpstreamError(AcquisitionError):
    """The upstream hospital data API failed or reported an error."""


class InvalidPayloadError(AcquisitionError):
    """The upstream payload does not match any known record layout."""
