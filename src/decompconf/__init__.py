"""Decompilation run parameters: typed container, JSON document contract, path normalization."""

from decompconf.address import AddressRange
from decompconf.parameters import Parameters

__version__ = "0.1.0"

__all__ = [
    "AddressRange",
    "Parameters",
    "__version__",
]
