"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path)

# CORS
CORS_ORIGINS: list[str] = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Rate limiting
RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
RATE_LIMIT_CONVERT: str = os.getenv("RATE_LIMIT_CONVERT", "120/minute")

# Inverse projection: cap on the latitude fixed-point iteration, and its
# stopping residual in metres (0.01mm)
UNPROJECT_MAX_ITERATIONS: int = int(os.getenv("UNPROJECT_MAX_ITERATIONS", "32"))
UNPROJECT_TOLERANCE_M: float = float(os.getenv("UNPROJECT_TOLERANCE_M", "0.00001"))

# Default precision for formatted grid references (total digits, 2-10)
DEFAULT_GRIDREF_DIGITS: int = int(os.getenv("DEFAULT_GRIDREF_DIGITS", "10"))

# Bulk file conversion
BULK_MAX_ROWS: int = int(os.getenv("BULK_MAX_ROWS", "100000"))
