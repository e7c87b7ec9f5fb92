"""Resource booking service with a JSON HTTP API and a double-booking check."""

__version__ = "0.1.0"

__all__ = ["__version__"]