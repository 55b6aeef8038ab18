"""ariesbot — chat command processor with a persistent user registry."""

__version__ = "0.1.0"
