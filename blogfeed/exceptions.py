class BlogFeedError(Exception):
    """Base class for errors that abort a feed build."""


class ConfigurationError(BlogFeedError):
    pass


class MalformedDocumentError(BlogFeedError):
    """A post could not be turned into a usable record."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
