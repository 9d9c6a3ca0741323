"""Logging and operation timing for the alt text service."""

import logging
import time
from typing import Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("alt_text_generator")


class OperationTimer:
    """
    Context manager for timing a single operation.

    Usage:
        with OperationTimer("vision_api") as timer:
            # call the provider
        timer.duration_ms
    """

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.start_time: Optional[float] = None
        self.duration_ms: int = 0

    def __enter__(self):
        self.start_time = time.time()
        logger.debug(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.duration_ms = int((time.time() - self.start_time) * 1000)
            logger.debug(f"Operation {self.operation_name} completed in {self.duration_ms}ms")

        if exc_type:
            logger.error(
                f"Operation failure: {self.operation_name}: {exc_type.__name__}: {exc_val}"
            )

        return False  # Don't suppress exceptions
