"""Emergency drone coordination simulation: server, drone client, map view and an in-process model."""

__version__ = "0.1.0"
__all__ = ["__version__"]