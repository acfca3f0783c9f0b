"""bitctl: decimal / binary / hexadecimal bit-pattern converter."""

__version__ = "0.1.0"
