import os
from dotenv import load_dotenv
from pathlib import Path

# load .env at startup from project root
# Path(__file__) is outbound/core/config.py, so we go up 2 levels to reach project root
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / ".env")

# Transport configuration
HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
HTTP_TRUST_POLICY = os.getenv("HTTP_TRUST_POLICY", "verified").lower().strip()  # "verified" | "trust_all"

# Connection pool sizing (shared by both trust policies)
HTTP_MAX_CONNECTIONS = int(os.getenv("HTTP_MAX_CONNECTIONS", "100"))
HTTP_MAX_KEEPALIVE_CONNECTIONS = int(os.getenv("HTTP_MAX_KEEPALIVE_CONNECTIONS", "20"))
HTTP_KEEPALIVE_EXPIRY = float(os.getenv("HTTP_KEEPALIVE_EXPIRY", "5.0"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_config():
    """Validate that transport environment variables hold usable values."""
    problems = []

    if HTTP_TIMEOUT_SECONDS <= 0:
        problems.append(f"HTTP_TIMEOUT_SECONDS must be positive, got {HTTP_TIMEOUT_SECONDS}")
    if HTTP_TRUST_POLICY not in ("verified", "trust_all"):
        problems.append(f"HTTP_TRUST_POLICY must be 'verified' or 'trust_all', got {HTTP_TRUST_POLICY!r}")
    if HTTP_MAX_CONNECTIONS <= 0:
        problems.append(f"HTTP_MAX_CONNECTIONS must be positive, got {HTTP_MAX_CONNECTIONS}")
    if HTTP_MAX_KEEPALIVE_CONNECTIONS < 0:
        problems.append(
            f"HTTP_MAX_KEEPALIVE_CONNECTIONS must not be negative, got {HTTP_MAX_KEEPALIVE_CONNECTIONS}"
        )

    if problems:
        raise ValueError(
            "Invalid HTTP client configuration:\n" + "\n".join(problems) +
            "\nPlease check your .env file and environment."
        )
