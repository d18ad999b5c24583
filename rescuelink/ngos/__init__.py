"""
RescueLink - NGO Directory Module
"""

from rescuelink.ngos.directory import Ngo, NgoDirectory, InMemoryNgoDirectory

__all__ = [
    "Ngo",
    "NgoDirectory",
    "InMemoryNgoDirectory",
]
