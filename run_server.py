#!/usr/bin/env python3
"""Run the coniuga API server (Italian conjugation quiz backed by Gemini)."""

import argparse

import uvicorn

from core.config import CONFIG_FILE, GEMINI_MODEL


def main():
    parser = argparse.ArgumentParser(description='Coniuga API server')
    parser.add_argument('--host', default='0.0.0.0', help='Bind address (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=8000, help='Port (default: 8000)')
    parser.add_argument('--no-reload', action='store_true', help='Disable auto-reload')
    args = parser.parse_args()

    print(f"Starting Coniuga API server with model {GEMINI_MODEL}...")
    print(f"API key is read from GEMINI_API_KEY or {CONFIG_FILE}")
    print(f"API documentation available at: http://localhost:{args.port}/docs")
    uvicorn.run(
        "server.app:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload
    )


if __name__ == "__main__":
    main()
