# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from .logger import get_logger
from .repeater import Repeater

logger = get_logger(__name__)


def handle_emit_error(
    exception: BaseException,
    metadata: Repeater,
) -> None:
    """
    Report a queue that could not be configured and let the remaining queues proceed.
    """
    logger.error(exception)

    if len(metadata.encountered_errors) == len(metadata.items):
        logger.error("No queue could be configured.")


def handle_best_effort_error(
    exception: BaseException,
    _metadata: Repeater,
) -> None:
    """
    Report a failed step which does not prevent the rest of the operation from completing.
    """
    logger.warning(exception)
