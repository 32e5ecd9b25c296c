"""Harvest player profiles and transfer listings from copied game text."""

__version__ = "0.1.0"
