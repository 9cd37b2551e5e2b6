#!/usr/bin/env python3
"""
Storefront Backend Runner
=========================

Usage:
    python run_app.py                    # Development mode with auto-reload
    python run_app.py --mode prod        # Production mode, several workers
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys


def check_environment() -> bool:
    """Check that the required settings are present"""
    if os.path.exists(".env"):
        print(".env file found")

    missing = [
        name for name in ("DATABASE_URL", "SECRET_KEY")
        if name not in os.environ and not os.path.exists(".env")
    ]
    if missing:
        print(f"Missing settings: {', '.join(missing)} (set them or add a .env file)")
        return False
    return True


def run_app(host: str, port: int, reload: bool, workers: int) -> None:
    """Run the FastAPI application under uvicorn"""
    import uvicorn

    print(f"Starting Storefront API on {host}:{port}")
    print(f"API Docs: http://{host}:{port}/api/docs")

    uvicorn.run(
        "storefront.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level="info"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Storefront Backend Runner")
    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--workers", type=int, default=4, help="Worker processes in prod mode")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")

    args = parser.parse_args()

    if not check_environment():
        return 1

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload, args.workers)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)
