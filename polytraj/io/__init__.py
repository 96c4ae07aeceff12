"""
Trajectory persistence: binary and text channels plus file helpers.
"""

from .channel import BinaryChannel, Channel, TextChannel, load, save

__all__ = [
    "Channel",
    "BinaryChannel",
    "TextChannel",
    "save",
    "load",
]
