"""Edit a single S3 object in a local terminal editor."""

__version__ = "0.1.0"
