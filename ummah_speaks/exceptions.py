"""Custom exceptions for the feeling-to-guidance pipeline."""


class EmptyFeelingError(ValueError):
    """Raised when a submission has no text after trimming."""

    def __init__(self, message: str | None = None):
        self.message = message or "Please share how you are feeling."
        super().__init__(self.message)


class PipelineBusyError(RuntimeError):
    """Raised when a run is submitted while another one is still in progress."""

    pass


class ConfigurationError(Exception):
    """A collaborator is missing a credential or setting it needs."""

    def __init__(self, message: str | None = None):
        self.message = message or "Service is not configured."
        super().__init__(self.message)


class ClassificationFailedError(Exception):
    def __init__(self, message: str | None = None):
        self.message = (
            f"Classification failed: {message}" if message else "Classification failed"
        )
        super().__init__(self.message)


class PassageRetrievalError(Exception):
    """Transport-level failure talking to a passage source."""

    def __init__(self, message: str | None = None):
        self.message = (
            f"Passage retrieval failed: {message}"
            if message
            else "Passage retrieval failed"
        )
        super().__init__(self.message)


class PassageNotFoundError(LookupError):
    """Every passage source came back empty for the search term."""

    def __init__(self, term: str, sources: list[str] | None = None):
        self.term = term
        self.sources = sources or []
        self.message = f"No passage found for '{term}'"
        super().__init__(self.message)


class CompositionFailedError(Exception):
    def __init__(self, message: str | None = None):
        self.message = (
            f"Composition failed: {message}" if message else "Composition failed"
        )
        super().__init__(self.message)
