"""Entry point: python -m services.workshop"""

import asyncio
import logging
import os
import signal

from bottega import STARTING_FLORINS, InventoryLedger, WorkshopSession

from services.workshop.workshop import WorkshopService


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    nats_url = os.environ.get("NATS_URL", "nats://localhost:4222")
    session_id = os.environ.get("WORKSHOP_SESSION_ID", "default")
    florins = int(os.environ.get("STARTING_FLORINS", STARTING_FLORINS))

    session = WorkshopSession(ledger=InventoryLedger(_currency=florins))
    service = WorkshopService(session_id, nats_url, session=session)
    loop = asyncio.get_running_loop()

    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logging.getLogger(__name__).info("Shutdown signal received")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    await service.start()
    logging.getLogger(__name__).info(
        "Workshop '%s' is running on %s. Press Ctrl+C to stop.", session_id, nats_url
    )

    await stop_event.wait()
    await service.stop()


if __name__ == "__main__":
    asyncio.run(main())
