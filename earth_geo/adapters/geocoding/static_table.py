"""Offline place-name table.

Used when the host has no HTTP capability at all. Keys are normalized
place names (see normalize_place_name); values are (latitude, longitude).
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ...domain.models import GeoFix

_NON_ALNUM_RUN = re.compile(r"[^0-9a-z]+")

CITIES: Dict[str, Tuple[float, float]] = {
    # North America (USA & Canada)
    "new_york": (40.7128, -74.0060),
    "nyc": (40.7128, -74.0060),
    "los_angeles": (34.0522, -118.2437),
    "la": (34.0522, -118.2437),
    "chicago": (41.8781, -87.6298),
    "houston": (29.7604, -95.3698),
    "phoenix": (33.4484, -112.0740),
    "philadelphia": (39.9526, -75.1652),
    "san_antonio": (29.4241, -98.4936),
    "san_diego": (32.7157, -117.1611),
    "dallas": (32.7767, -96.7970),
    "san_jose": (37.3382, -121.8863),
    "austin": (30.2672, -97.7431),
    "toronto": (43.6532, -79.3832),
    "montreal": (45.5017, -73.5673),
    "vancouver": (49.2827, -123.1207),
    "calgary": (51.0447, -114.0719),
    # Central & South America
    "mexico_city": (19.4326, -99.1332),
    "guadalajara": (20.6597, -103.3496),
    "monterrey": (25.6866, -100.3161),
    "bogota": (4.7110, -74.0721),
    "medellin": (6.2442, -75.5812),
    "cali": (3.4516, -76.5320),
    "lima": (-12.0464, -77.0428),
    "santiago": (-33.4489, -70.6693),
    "buenos_aires": (-34.6037, -58.3816),
    "sao_paulo": (-23.5505, -46.6333),
    "rio_de_janeiro": (-22.9068, -43.1729),
    "brasilia": (-15.8267, -47.9218),
    "montevideo": (-34.9011, -56.1645),
    # Europe
    "london": (51.5074, -0.1278),
    "manchester": (53.4808, -2.2426),
    "birmingham": (52.4862, -1.8904),
    "edinburgh": (55.9533, -3.1883),
    "dublin": (53.3498, -6.2603),
    "paris": (48.8566, 2.3522),
    "lyon": (45.7640, 4.8357),
    "marseille": (43.2965, 5.3698),
    "berlin": (52.5200, 13.4050),
    "hamburg": (53.5511, 9.9937),
    "munich": (48.1351, 11.5820),
    "frankfurt": (50.1109, 8.6821),
    "madrid": (40.4168, -3.7038),
    "barcelona": (41.3851, 2.1734),
    "valencia": (39.4699, -0.3763),
    "lisbon": (38.7223, -9.1393),
    "porto": (41.1579, -8.6291),
    "palma_de_mallorca": (39.5696, 2.6502),
    "rome": (41.9028, 12.4964),
    "milan": (45.4642, 9.1900),
    "naples": (40.8518, 14.2681),
    "brussels": (50.8503, 4.3517),
    "amsterdam": (52.3676, 4.9041),
    "vienna": (48.2082, 16.3738),
    "zurich": (47.3769, 8.5417),
    "geneva": (46.2044, 6.1432),
    "prague": (50.0755, 14.4378),
    "budapest": (47.4979, 19.0402),
    "warsaw": (52.2297, 21.0122),
    "bucharest": (44.4268, 26.1025),
    "sofia": (42.6977, 23.3219),
    "moscow": (55.7558, 37.6176),
    "saint_petersburg": (59.9343, 30.3351),
    "stockholm": (59.3293, 18.0686),
    "gothenburg": (57.7089, 11.9746),
    "oslo": (59.9139, 10.7522),
    "copenhagen": (55.6761, 12.5683),
    "helsinki": (60.1699, 24.9384),
    "reykjavik": (64.1466, -21.9426),
    # Middle East
    "istanbul": (41.0082, 28.9784),
    "ankara": (39.9208, 32.8541),
    "izmir": (38.4237, 27.1428),
    "riyadh": (24.7136, 46.6753),
    "jeddah": (21.4858, 39.1925),
    "dubai": (25.2048, 55.2708),
    "abu_dhabi": (24.4539, 54.3773),
    "doha": (25.2854, 51.5310),
    "muscat": (23.5859, 58.4059),
    # Africa
    "cairo": (30.0444, 31.2357),
    "alexandria": (31.2001, 29.9187),
    "casablanca": (33.5731, -7.5898),
    "algiers": (36.7538, 3.0588),
    "tunis": (36.8065, 10.1815),
    "tripoli": (32.8872, 13.1913),
    "lagos": (6.5244, 3.3792),
    "johannesburg": (-26.2041, 28.0473),
    "cape_town": (-33.9249, 18.4241),
    "durban": (-29.8587, 31.0218),
    "nairobi": (-1.2921, 36.8219),
    "addis_ababa": (9.0300, 38.7400),
    "accra": (5.6037, -0.1870),
    "abidjan": (5.359951, -4.008256),
    # Central & South Asia
    "mumbai": (19.0760, 72.8777),
    "delhi": (28.6139, 77.2090),
    "kolkata": (22.5726, 88.3639),
    "chennai": (13.0827, 80.2707),
    "bangalore": (12.9716, 77.5946),
    "hyderabad": (17.3850, 78.4867),
    "ahmedabad": (23.0225, 72.5714),
    "pune": (18.5204, 73.8567),
    "karachi": (24.8607, 67.0011),
    "lahore": (31.5204, 74.3587),
    # East & Southeast Asia
    "tokyo": (35.6895, 139.6917),
    "yokohama": (35.4437, 139.6380),
    "osaka": (34.6937, 135.5023),
    "nagoya": (35.1815, 136.9066),
    "sapporo": (43.0621, 141.3544),
    "seoul": (37.5665, 126.9780),
    "busan": (35.1796, 129.0756),
    "beijing": (39.9042, 116.4074),
    "shanghai": (31.2304, 121.4737),
    "guangzhou": (23.1291, 113.2644),
    "shenzhen": (22.5431, 114.0579),
    "chengdu": (30.5728, 104.0668),
    "chongqing": (29.4316, 106.9123),
    "tianjin": (39.3434, 117.3616),
    "hangzhou": (30.2741, 120.1551),
    "wuhan": (30.5928, 114.3055),
    "hong_kong": (22.3193, 114.1694),
    "taipei": (25.0330, 121.5654),
    "manila": (14.5995, 120.9842),
    "quezon_city": (14.6760, 121.0437),
    "jakarta": (-6.2088, 106.8456),
    "surabaya": (-7.2575, 112.7521),
    "bandung": (-6.9175, 107.6191),
    "kuala_lumpur": (3.1390, 101.6869),
    "george_town": (5.4141, 100.3288),  # Penang
    "singapore": (1.3521, 103.8198),
    "bangkok": (13.7563, 100.5018),
    "ho_chi_minh": (10.8231, 106.6297),
    "hanoi": (21.0278, 105.8342),
    "phnom_penh": (11.5564, 104.9282),
    "vientiane": (17.9757, 102.6331),
    "yangon": (16.8409, 96.1735),
    # Oceania
    "sydney": (-33.8688, 151.2093),
    "melbourne": (-37.8136, 144.9631),
    "brisbane": (-27.4698, 153.0251),
    "perth": (-31.9505, 115.8605),
    "adelaide": (-34.9285, 138.6007),
    "auckland": (-36.8485, 174.7633),
    "wellington": (-41.2865, 174.7762),
    "christchurch": (-43.5321, 172.6362),
    # Landmarks
    "mariana": (11.35, 142.2),
    "everest": (27.988333, 86.925278),
}


def normalize_place_name(name: str) -> str:
    """Normalize a place name to a table key.

    Accents are dropped, the text is lower-cased and every run of
    characters outside ``[a-z0-9]`` becomes a single underscore:
    "São Paulo" -> "sao_paulo", "New  York!" -> "new_york".
    """
    decomposed = unicodedata.normalize("NFKD", name)
    ascii_text = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALNUM_RUN.sub("_", ascii_text.lower()).strip("_")


@dataclass
class StaticPlaceTable:
    """Place lookups against a fixed table.

    This adapter implements PlaceTablePort. Later entries override
    earlier ones with the same normalized key.
    """

    places: Mapping[str, Tuple[float, float]] = field(default_factory=lambda: CITIES)

    def lookup(self, name: str) -> Optional[GeoFix]:
        """Look up a place by name.

        Args:
            name: Place name in any case, with spaces or punctuation.

        Returns:
            The fix labelled with the name as typed, or None if unknown.
        """
        key = normalize_place_name(name)
        coordinates = self.places.get(key) if key else None
        if coordinates is None:
            return None
        latitude, longitude = coordinates
        return GeoFix(
            latitude=latitude,
            longitude=longitude,
            display_name=name.strip(),
        )
