#!/usr/bin/env python3
"""
Image presets server

Usage:
    python main.py serve                  # run the API with uvicorn
    python main.py serve --port 8080
    python main.py static-paths           # print paths to pre-render
"""

import argparse
import asyncio
import logging
import os

from fastapi import FastAPI

from image_presets import ImagePreset, create_images_route

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ============================================
# Presets
# ============================================

PRESETS = {
    "small": ImagePreset(transform=lambda image: image.resize(300, 300)),
    "thumb": ImagePreset(transform=lambda image: image.resize(64, 64)),
}

images_route = create_images_route(PRESETS)


def create_app() -> FastAPI:
    app = FastAPI(title="Image Presets")
    app.include_router(images_route.router)
    app.include_router(images_route.status_router)
    return app


app = create_app()


def main():
    parser = argparse.ArgumentParser(description="Image presets server")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))

    sub.add_parser("static-paths", help="Print every image path to pre-render")

    args = parser.parse_args()

    if args.command == "serve":
        import uvicorn
        uvicorn.run(app, host=args.host, port=args.port)
    elif args.command == "static-paths":
        for path in asyncio.run(images_route.get_static_paths()):
            print(path)


if __name__ == "__main__":
    main()
