"""Entry point for serving the Blog API.

Configuration (database location, host, port, log level) is read from
environment variables; see ``blog_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from blog_api.app.server import BlogServer


async def main() -> None:
    """Run the API until interrupted."""
    server = BlogServer()
    await server.start()
    try:
        # Wait for uvicorn to exit on its own (e.g. SIGINT).
        while server.running:
            await asyncio.sleep(1)
    finally:
        await server.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")
