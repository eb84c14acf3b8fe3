"""
ASGI entry point: ``uvicorn app.main:app``.

$ENVIRONMENT selects the config file (production, otherwise development).
"""
import logging
import os

import uvicorn

from app.create_app import get_app
from app.utils.constants import ConfigFile

CONFIG_FILE = (
    ConfigFile.PRODUCTION
    if os.environ.get("ENVIRONMENT") == "production"
    else ConfigFile.DEVELOPMENT
)

app = get_app(CONFIG_FILE)


if __name__ == "__main__":
    debug = app.state.config.section("api").get("debug", False)
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
        log_level="debug" if debug else "info",
    )
