"""
CodeMatch runtime configuration.

Values are read from the environment once, at import time.
"""

import os

API_VERSION = "1.4.0"

DATABASE_URL = os.getenv("DATABASE_URL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Max points a user can gain (and separately lose) per calendar day
DAILY_POINTS_CAP = int(os.getenv("DAILY_POINTS_CAP", "30"))
