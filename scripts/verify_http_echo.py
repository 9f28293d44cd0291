"""Smoke-run the full container lifecycle against the local Docker daemon.

Pulls hashicorp/http-echo, publishes it on a free host port, checks the echo
response and removes the container again.

    python scripts/verify_http_echo.py [--remove-image]
"""

import argparse
import asyncio
import logging
import sys
import time

import httpx

from udock.config import get_settings
from udock.runtime.session import Session
from udock.shared.exceptions import ConnectivityFailed, UdockError
from udock.shared.net import get_free_port

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger("verify_http_echo")

IMAGE = "hashicorp/http-echo:latest"
CONTAINER_PORT = "5678"


async def main(remove_image: bool) -> int:
    settings = get_settings()
    try:
        session = await Session.create(settings)
    except ConnectivityFailed as exc:
        logger.error("docker is not reachable: %s", exc.__cause__)
        return 2

    async with session:
        try:
            await session.pull_image(IMAGE)

            host_port = str(get_free_port())
            name = f"udock-verify-{time.time_ns()}"
            container_id = await session.create_container(IMAGE, name, {host_port: CONTAINER_PORT})
            try:
                started = time.monotonic()
                await session.start_container(container_id)
                logger.info("container running after %.2fs", time.monotonic() - started)

                async with httpx.AsyncClient(timeout=5.0) as http:
                    resp = await http.get(f"http://localhost:{host_port}/")
                logger.info("GET :%s/ -> %d %r", host_port, resp.status_code, resp.text)
                if resp.status_code != 200 or resp.text != "hello-world\n":
                    logger.error("unexpected echo response")
                    return 1
            finally:
                await session.remove_container(container_id)

            if remove_image:
                await session.remove_image(IMAGE)
                logger.info("removed image %s", IMAGE)
        except UdockError as exc:
            logger.error("lifecycle failed: %s (cause: %s)", exc, exc.__cause__)
            return 1

    logger.info("verification passed")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--remove-image", action="store_true", help="remove the image afterwards")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.remove_image)))
