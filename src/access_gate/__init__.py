"""Access Gate — exact-price payment gate with two-phase role transfer."""

__version__ = "0.1.0"
