"""Global configuration values."""

import os

SERVICE_NAME = os.environ.get("SERVICE_NAME", "Profile Enrichment Service")

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 3000))

# Outbound fetch of the submitted profile URL
FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS", 10))

# Some sites reject default/bot user agents
USER_AGENT = os.environ.get(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)

# Artificial latency of the simulated database save
PERSIST_DELAY_SECONDS = float(os.environ.get("PERSIST_DELAY_SECONDS", 0.1))

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
