"""StackScout - project stack detection and preset recommendation."""

__version__ = "0.1.0"
