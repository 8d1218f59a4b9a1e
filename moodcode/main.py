"""Entry: start the API server."""
import logging
import uvicorn

from moodcode.config import API_HOST, API_PORT, is_production


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "moodcode.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=not is_production(),
    )


if __name__ == "__main__":
    run()
