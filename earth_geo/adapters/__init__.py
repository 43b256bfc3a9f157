"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the lookup engine to external systems like:
- HTTP (requests on a thread pool)
- Geolocation and geocoding providers (ip-api, Nominatim)
- The offline place table
- Caching (in-memory, null)
- Console sessions for the CLI
"""
