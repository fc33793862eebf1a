import os
from dotenv import load_dotenv

load_dotenv()

SERVICE_HOST = os.getenv("SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("SERVICE_PORT", 5000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_cors_origins() -> list[str]:
    """Allowed CORS origins, parsed from the comma-separated CORS_ORIGINS variable."""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
