import sys

import uvicorn
from loguru import logger

from dayindex.api import create_app
from dayindex.config import get_settings
from dayindex.query import DayIndexService


def main() -> None:
    settings = get_settings()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    service = DayIndexService.from_settings(settings)
    logger.info(f"Serving day-type queries on {settings.host}:{settings.port}")
    uvicorn.run(create_app(service), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
