"""docnav - keyword, TF-IDF and relationship search for markdown docs."""

__version__ = "0.1.0"
