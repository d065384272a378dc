import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

GENERATOR_VERSION = os.getenv("ARCHEXPORT_GENERATOR_VERSION", "0.5.0")
DEFAULT_MODEL_NAME = os.getenv("ARCHEXPORT_MODEL_NAME", "ArchiMate Export")
DRAWIO_HOST = os.getenv("ARCHEXPORT_HOST", "archexport")
LOG_LEVEL = os.getenv("ARCHEXPORT_LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ARCHEXPORT_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
