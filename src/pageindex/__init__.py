"""pageindex - publish a local snapshot of web pages to a full-text index."""

__version__ = "0.1.0"
