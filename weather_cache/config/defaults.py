"""Default locations for the cache directory, dates list, and API origins."""

DEFAULT_CONFIG_PATH = "ops/configs/default.yaml"
DEFAULT_CACHE_DIR = "weather-data"
DEFAULT_DATES_FILE = "dates.txt"

# Angular dev server
DEFAULT_CORS_ORIGINS: list[str] = ["http://localhost:4200"]
