"""Runtime settings, overridable via environment variables.

Game rules live in ``battleship.utils.constants``; this module only holds
knobs for running the server and the local game.
"""

import os

# ===========================================================================
# Network
# ===========================================================================
# BATTLESHIP_HOST: address the server binds to. Defaults to "0.0.0.0".
HOST: str = os.getenv("BATTLESHIP_HOST", "0.0.0.0")

# BATTLESHIP_PORT: port the server listens on. Defaults to 8000.
PORT: int = int(os.getenv("BATTLESHIP_PORT", "8000"))

# BATTLESHIP_CORS_ORIGINS: comma-separated list of allowed origins.
#   Defaults to "*".
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("BATTLESHIP_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# ===========================================================================
# Logging
# ===========================================================================
# BATTLESHIP_LOG_LEVEL: root log level name. Defaults to "INFO".
LOG_LEVEL: str = os.getenv("BATTLESHIP_LOG_LEVEL", "INFO").upper()

# BATTLESHIP_DEBUG: if "1", enables uvicorn auto-reload and DEBUG logging.
DEBUG: bool = os.getenv("BATTLESHIP_DEBUG", "0") == "1"

# ===========================================================================
# Randomness
# ===========================================================================
# BATTLESHIP_SEED: optional integer seed for room codes and first-turn
#   selection. Unset means nondeterministic.
SEED: int | None = int(os.environ["BATTLESHIP_SEED"]) if os.getenv("BATTLESHIP_SEED") else None

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
