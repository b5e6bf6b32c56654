"""Server entry point."""

import uvicorn

from intent_bot.api.app import create_app
from intent_bot.config import settings
from intent_bot.logging import get_logger

logger = get_logger(__name__)

app = create_app()


def main() -> None:
    logger.info(f"{settings.BOT_NAME} listening on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
