"""vacdiag: retrieval-augmented vacuum pump diagnostics."""

__version__ = "0.1.0"
