"""Error types raised at the client's I/O boundaries."""


class ChannelError(Exception):
    """Raised when the session channel cannot be opened."""


class MessageDecodeError(ValueError):
    """Raised when an inbound frame is not a known arbiter event."""


class ExtractorLoadError(RuntimeError):
    """Raised when the configured signature extractor cannot be loaded."""
