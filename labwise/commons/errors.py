class LabWiseError(Exception):
    """Base error; ``message`` is safe to show to the user as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OcrError(LabWiseError):
    pass


# Rate limit is retried with backoff; both move on to the fallback key
class TransientOcrError(OcrError):
    pass


class RateLimitError(TransientOcrError):
    pass


class QuotaExceededError(TransientOcrError):
    pass


# Retrying the same request does not help
class TerminalOcrError(OcrError):
    pass


class InvalidCredentialError(TerminalOcrError):
    pass


class FileTooLargeError(TerminalOcrError):
    pass


class UnsupportedDocumentError(TerminalOcrError):
    pass


class OcrServiceError(TerminalOcrError):
    pass


class LowQualityScanError(OcrError):
    """No text, or too little text, came back for the document."""
