"""
Exception types and error message extraction.
"""


class SiteRatingError(Exception):
    """Base class for errors raised by this package."""


class ListStoreError(SiteRatingError):
    """A block list could not be decoded, written, or read."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Falls back to the exception class name when the exception
    carries no message.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
