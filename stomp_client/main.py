from __future__ import annotations

import asyncio
import functools
import logging
import sys

from stomp_client.config import CLIENT_CONFIG, ConfigError, load_config
from stomp_client.core import connect, open_connection, options_from_config, process
from stomp_shared.protocol.errors import StompError

logger = logging.getLogger(__name__)


async def run_client() -> int:
    try:
        load_config()
    except ConfigError as exc:
        logging.basicConfig()
        logger.error("Invalid configuration: %s", exc)
        return 2
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])

    try:
        connection = await open_connection(CLIENT_CONFIG["broker_host"], CLIENT_CONFIG["broker_port"])
    except StompError as exc:
        logger.error("%s", exc.message)
        return 1

    try:
        session = await connect(
            connection,
            *options_from_config(CLIENT_CONFIG),
            processor_factory=functools.partial(process, inbox_size=CLIENT_CONFIG["inbox_size"]),
        )
    except StompError as exc:
        logger.error("Handshake failed: %s", exc.message)
        await connection.close()
        return 1

    print(f"version={session.version} session={session.id} server={session.server}")
    print(f"heart-beat={session.heart_beat.to_header()}")
    await session.close()
    return 0


def main() -> None:
    sys.exit(asyncio.run(run_client()))


if __name__ == "__main__":
    main()
