"""Error taxonomy for contract analysis."""

from constants import (
    EMPTY_INPUT_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    PAYMENT_REQUIRED_MESSAGE,
    RATE_LIMIT_MESSAGE,
)


class ContractAnalysisError(Exception):
    """Base class for expected analysis failures.

    The message is user-facing and can be returned to the client as is.
    """

    default_message = "Erreur lors de l'analyse du contrat"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class EmptyInputError(ContractAnalysisError):
    """No analyzable text was provided."""

    default_message = EMPTY_INPUT_MESSAGE


class UpstreamError(ContractAnalysisError):
    """The generation backend failed or answered with a non-success status."""

    def __init__(self, message=None, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class RateLimited(UpstreamError):
    default_message = RATE_LIMIT_MESSAGE


class PaymentRequired(UpstreamError):
    default_message = PAYMENT_REQUIRED_MESSAGE


class MalformedResponseError(ContractAnalysisError):
    """The model reply could not be decoded into an analysis."""

    default_message = MALFORMED_RESPONSE_MESSAGE
