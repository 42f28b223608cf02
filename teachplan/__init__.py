"""Achievement-standard extraction for teaching and evaluation plans."""
__version__ = "1.0.0"
