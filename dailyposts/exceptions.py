class ContentError(Exception):
    """Base error for content that cannot be turned into a post."""


class FrontMatterError(ContentError):
    """The front-matter block is missing, malformed, or not a mapping."""
