import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
AI_MODEL = os.getenv("AI_MODEL", "google/gemini-3-flash-preview")
AI_TIMEOUT = float(os.getenv("AI_TIMEOUT", "300"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Where DiagramClient sends requests when no base_url is given
DIAGRAM_API_URL = os.getenv("DIAGRAM_API_URL", "http://localhost:8000")


def get_api_key() -> str | None:
    # read per call so a key added to the environment after import is honoured
    return os.getenv("AI_API_KEY") or None
