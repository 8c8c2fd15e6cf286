import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


class Settings:
    PROJECT_NAME = "Hackathon Registration API"
    VERSION = "1.0.0"

    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'hackathon.db'}")
    PORT = int(os.getenv("PORT", 5001))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Profile verification (GitHub lookup + LinkedIn probe)
    GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
    PROFILE_VERIFY_TIMEOUT_SECONDS = float(os.getenv("PROFILE_VERIFY_TIMEOUT_SECONDS", 10))

    # Listing / reporting
    DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", 10))
    MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", 100))
    STATS_WINDOW_DAYS = int(os.getenv("STATS_WINDOW_DAYS", 7))

    SEED_DEMO_PARTICIPANTS = os.getenv("SEED_DEMO_PARTICIPANTS", "false").lower() == "true"

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()
