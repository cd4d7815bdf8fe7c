"""
NiceGUI frontend for Pricebook.

Customers browse categories and prices; admins manage the catalog.
The store API URL comes from PRICEBOOK_API_URL (default http://localhost:8000).
"""

import logging

from nicegui import app, ui

from pricebook.logger import setup_logging
from pricebook_web.api_client import CatalogClient
from pricebook_web.config import settings
from pricebook_web.views import register_pages

setup_logging(
    level=settings.LOG_LEVEL,
    enable_file=settings.ENABLE_FILE_LOGGING,
    log_dir=settings.LOG_DIR,
)
logger = logging.getLogger(__name__)

client = CatalogClient()
register_pages(client)
app.on_shutdown(client.aclose)


def main() -> None:
    logger.info(f"Starting Pricebook UI against {settings.API_URL}")
    ui.run(
        port=settings.PORT,
        title=settings.TITLE,
        storage_secret=settings.STORAGE_SECRET,
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
