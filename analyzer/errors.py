# Feedback Analyzer Errors
# Failures surfaced by the external service adapters


class AnalyzerError(Exception):
    """Base error for the analyzer. Carries a human-readable message and the cause."""

    def __init__(self, message, cause=None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def to_dict(self):
        details = str(self.cause) if self.cause is not None else self.message
        return {
            'error': self.message,
            'details': details
        }


class InferenceError(AnalyzerError):
    """The text-generation service failed or returned an unusable reply."""


class StoreError(AnalyzerError):
    """The feedback store rejected a read or write."""
