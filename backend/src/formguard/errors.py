"""Exception types for formguard.

Configuration problems are raised when forms and rules are loaded.
The validation pass itself never raises; it reports problems as field
errors instead.
"""


class FormguardError(Exception):
    """Base class for formguard errors."""
    pass


class RuleConfigError(FormguardError):
    """A rule parameter has a shape the dependency resolver cannot use."""
    pass


class FormDefinitionError(FormguardError):
    """A form definition could not be loaded."""
    pass


class SubmissionError(FormguardError):
    """The form data could not be delivered to the server.

    Attributes:
        method: HTTP method used for the request
        url: Target URL
        status: HTTP status code, or 0 when no response was received
        status_text: Reason phrase or transport error description
    """

    def __init__(self, method: str, url: str, status: int = 0, status_text: str = ""):
        self.method = method
        self.url = url
        self.status = status
        self.status_text = status_text
        super().__init__(f"{method} {url} {status} ({status_text})")
