"""Top-level package for earth-geo.

Resolves IP addresses and place names to geographic coordinates through
an HTTP provider, caches the answers, and projects them onto a planar
world map so that players can be placed where they (or their chosen
city) are on Earth.
"""

__version__ = "0.1.0"
