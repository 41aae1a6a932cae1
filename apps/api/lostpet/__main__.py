"""Run the API with ``python -m lostpet``."""

import logging
import sys

import uvicorn

from lostpet.core.config import get_settings
from lostpet.core.secrets import MissingSigningSecretError
from lostpet.main import create_app

logger = logging.getLogger("lostpet")


def main() -> int:
    settings = get_settings()
    try:
        app = create_app(settings)
    except MissingSigningSecretError as exc:
        logger.critical("startup.failed error=%s", exc)
        return 1

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
