"""Method catalog - tiered entity models, remote endpoint client and navigation."""

__version__ = "0.1.0"
