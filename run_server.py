#!/usr/bin/env python3
"""Development server runner for Battleship."""

import uvicorn

from battleship import config

if __name__ == "__main__":
    uvicorn.run(
        "battleship.server.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,  # Auto-reload on code changes
        log_level=config.LOG_LEVEL.lower(),
    )
