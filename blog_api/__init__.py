"""Blog API: authentication, posts and comments over HTTP/JSON."""

__version__ = "1.0.0"
