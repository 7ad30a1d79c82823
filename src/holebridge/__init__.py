"""Holebridge - Turn polygons with holes into single simple rings.

Holebridge eliminates the holes of a multiply-connected polygon by bridging
each hole into the outer boundary through a mutually visible vertex pair.
The result is one simple ring that traces the same shape, suitable for
renderers that only accept hole-free polygons.

Example:
    $ holebridge parcels.json

This will create parcels-simple.json with one flat coordinate array per polygon.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
