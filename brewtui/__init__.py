"""Terminal user interfaces built from a model, an update function and a view."""

__version__ = "0.1.0"