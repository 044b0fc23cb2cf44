"""
Configuration & Constants
=========================
Central registry for feed endpoints, timing and visual constants.

Every tunable number of the visualisation lives here so the render modes,
the feed and the driver agree on one set of values. Command-line options in
`quakeviz.main` override a few of them at start-up.

Exports:
    PRIMARY_FEED_URL, FALLBACK_FEED_URL (str): USGS GeoJSON summary feeds.
    FRAME_INTERVAL_MS, REFRESH_INTERVAL_MS (int): Scheduler intervals.
    MAX_PARTICLES (int): Live-particle cap of the artistic mode.
    MODE_ARTISTIC, MODE_GEOGRAPHIC, DEFAULT_MODE (str): Mode identifiers.
"""

# ---- data feed ----
PRIMARY_FEED_URL: str = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"
FALLBACK_FEED_URL: str = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/4.5_day.geojson"
REQUEST_TIMEOUT_S: float = 10.0
REFRESH_INTERVAL_MS: int = 5 * 60 * 1000

DEMO_EVENT_COUNT: int = 30
DEMO_LOCATIONS: tuple[str, ...] = (
    "San Francisco Bay area, California",
    "Tokyo, Japan",
    "Ring of Fire, Pacific Ocean",
    "Chile Coast",
    "Indonesia",
    "Alaska Peninsula",
    "Mediterranean Sea",
    "New Zealand",
)

# ---- animation ----
FRAME_INTERVAL_MS: int = 16
MAX_PARTICLES: int = 80

# ---- modes ----
MODE_ARTISTIC: str = "artistic"
MODE_GEOGRAPHIC: str = "geographic"
DEFAULT_MODE: str = MODE_ARTISTIC

# ---- colours ----
BACKGROUND_COLOR: str = "#0c0c0c"

# (upper bound exclusive, colour); the last band catches everything above
MAGNITUDE_COLOR_BANDS: tuple[tuple[float, str], ...] = (
    (2.5, "#90EE90"),
    (4.5, "#FFD700"),
    (6.0, "#FFA500"),
    (7.0, "#FF6347"),
)
MAGNITUDE_COLOR_MAX: str = "#FF0000"
