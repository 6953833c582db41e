"""Price tag images for products in an Atom product feed."""

__version__ = "1.0.0"
