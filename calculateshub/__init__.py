"""CalculatesHub calculation engine and calculator catalog."""

__version__ = "0.1.0"
