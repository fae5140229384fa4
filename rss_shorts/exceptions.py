class FeedFetchError(Exception):
    """Raised when an RSS/Atom feed cannot be fetched, times out, or cannot be parsed."""


class GenerationError(Exception):
    """Raised by `generate` when no payload can be produced. The message is user-visible."""

    def __init__(self, message: str = "Failed to generate") -> None:
        super().__init__(message or "Failed to generate")
        self.message = message or "Failed to generate"
