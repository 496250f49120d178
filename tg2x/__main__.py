"""Entry point: ``python -m tg2x``."""

import sys

import uvicorn

from tg2x.config import CONFIG, missing_required_env


def main():
    missing = missing_required_env()
    if missing:
        print(f"Missing required environment variables: {missing}", file=sys.stderr)
        sys.exit(1)
    # uvicorn handles SIGINT/SIGTERM and runs the shutdown hook
    uvicorn.run("tg2x.app:app", host="0.0.0.0", port=CONFIG["port"], log_level="info")


if __name__ == "__main__":
    main()
