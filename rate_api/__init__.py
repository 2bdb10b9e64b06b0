"""Currency conversion API with cached upstream exchange rates."""

__version__ = "0.1.0"
