# run_server.py
import faulthandler
import logging
import os
import sys
from pathlib import Path

# write logs next to the exe
BASE_DIR = Path(sys.executable).resolve().parent if getattr(sys, "frozen", False) else Path(__file__).resolve().parent
LOG_FILE = BASE_DIR / "backend.log"
CRASH_LOG_FILE = BASE_DIR / "backend_crash.log"

# dump fatal crashes too
faulthandler.enable(open(CRASH_LOG_FILE, "a", encoding="utf-8"))


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def main():
    # config first: it loads .env before anything reads the environment
    from app.core.config import LOG_LEVEL, PORT

    setup_logging(LOG_LEVEL)
    logger = logging.getLogger("run_server")

    logger.info("--- START ---")
    logger.info("exe=%s", sys.executable)
    logger.info("cwd=%s", os.getcwd())
    logger.info("base_dir=%s", BASE_DIR)

    try:
        import uvicorn

        # IMPORTANT: import app after logging is ready
        from main import app

        uvicorn.run(app, host="0.0.0.0", port=PORT, reload=False, log_level=LOG_LEVEL.lower())
    except Exception:
        logger.exception("Backend crashed")
        raise


if __name__ == "__main__":
    main()
