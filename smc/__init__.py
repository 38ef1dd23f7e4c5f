"""Sequencing core of the Simple Munchkin Counter."""

__version__ = "0.3.0"
