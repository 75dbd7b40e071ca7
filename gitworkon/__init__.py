"""Clone Git projects from predefined sources and safely remove them when done."""

__version__ = "0.1.0"