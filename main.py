import logging

import uvicorn

from catalog.config import get_config


if __name__ == "__main__":
    config = get_config()
    logging.basicConfig(level=config.logging.level)
    uvicorn.run("catalog.main:app", host=config.api.host, port=config.api.port)
