import logging

from .config import settings
from .entrypoints.fastapi_app import create_app

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(levelname)s:%(name)s:%(message)s",
)

app = create_app()
