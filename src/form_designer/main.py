#!/usr/bin/env python3
"""Form Designer - HTTP API for designing, previewing and exporting forms"""

import uvicorn
from fastapi import FastAPI

from form_designer.config import config
from form_designer.logging_config import get_logger, setup_logging
from form_designer.routers.designer import router as designer_router
from form_designer.routers.health import health

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="Form Designer",
    description="Compose forms from typed fields, edit their properties, preview and export them",
    version="1.0.0",
    license_info={
        "name": "MIT",
    },
)

app.include_router(health)
app.include_router(designer_router)


def run():
    port = config["port"]
    logger.info(f"Starting Form Designer on 0.0.0.0:{port}")
    logger.info(f"Storage backend: {config['storage_backend']}")

    try:
        uvicorn.run(app, host="0.0.0.0", port=port, log_level=config["log_level"].lower())
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise


if __name__ == "__main__":
    run()
