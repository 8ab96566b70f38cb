"""Run the conceptlab API with uvicorn.

    python run_server.py [--host 0.0.0.0] [--port 8000] [--reload]
"""

import argparse

import uvicorn

from conceptlab.config import Config


def main():
    parser = argparse.ArgumentParser(description="Run the conceptlab API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
