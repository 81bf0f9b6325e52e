"""Pattern-based intent detection and slot extraction."""

__version__ = "0.1.0"
