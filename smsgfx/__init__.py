"""
smsgfx - tile graphics engine for Sega Master System / Game Gear
"""

__version__ = "0.2.0"
