"""Configuration, animation and state-tracking core for screen-edge desktop widgets."""

__version__ = "0.1.0"