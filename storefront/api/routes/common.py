from starlette.concurrency import run_in_threadpool
import logging

from storefront.core.exceptions import ServerError, StorefrontError

logger = logging.getLogger(__name__)


async def run_service(action: str, func, *args, **kwargs):
    """
    Run a blocking service call off the event loop.

    Errors from the exception taxonomy pass through unchanged; anything else
    is logged and reported as a generic server error.
    """
    try:
        return await run_in_threadpool(func, *args, **kwargs)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Error {action}: {str(e)}", exc_info=True)
        raise ServerError(f"Error {action}: {str(e)}") from e
