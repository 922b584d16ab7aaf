# =============================================================================
# lib/readiness.py - Startup Readiness Wait
# =============================================================================
# The server must not accept requests until the datastore answers. The wait
# probes a bounded number of times with a fixed delay and gives up with
# DatastoreUnavailableError, which aborts application startup.
# =============================================================================

import asyncio
import logging

from lib.datastore import Datastore, DatastoreError, DatastoreUnavailableError

logger = logging.getLogger(__name__)


async def wait_for_datastore(
    datastore: Datastore,
    retries: int = 15,
    delay: float = 3.0,
) -> None:
    """
    Block until a trivial datastore round-trip succeeds.

    Args:
        datastore: Store to probe
        retries: Maximum number of probes
        delay: Seconds to sleep after each failed probe

    Raises:
        DatastoreUnavailableError: If every probe failed
    """
    for attempt in range(1, retries + 1):
        try:
            await datastore.ping()
        except DatastoreError as e:
            logger.info(f"Waiting for database... ({attempt}/{retries}): {e}")
            if attempt < retries:
                await asyncio.sleep(delay)
            continue

        logger.info("Connected to database")
        return

    logger.error("Could not connect to database")
    raise DatastoreUnavailableError(retries)
