"""Event management for the artist website: codec, validation, admin client."""

__version__ = "1.0.0"
