"""Validate-then-run template shared by the request-scoped services."""

import time
from abc import ABC, abstractmethod
from typing import Any

from app.core.exceptions import AppError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base class for application services.

    ``execute`` validates the input, awaits ``run`` and logs how long it took.
    Domain errors (``AppError``) pass through untouched; anything else is
    wrapped so callers only ever handle ``AppError``.
    """

    def __init__(self):
        self.logger = LOGGER
        self.service_name = self.__class__.__name__

    async def execute(self, *args, **kwargs) -> Any:
        """Validate, run and time one service call.

        Raises:
            AppError: If validation or execution fails
        """
        started = time.perf_counter()
        try:
            self.validate(*args, **kwargs)
            result = await self.run(*args, **kwargs)
        except AppError as e:
            self.logger.warning(
                f"{self.service_name} failed: {e}",
                extra={"service": self.service_name, "error_type": type(e).__name__},
            )
            raise
        except Exception as e:
            self.logger.error(
                f"{self.service_name} failed unexpectedly: {e}",
                exc_info=True,
                extra={"service": self.service_name},
            )
            raise AppError(f"{self.service_name} failed: {e}", original_error=e) from e

        self.logger.debug(
            f"{self.service_name} finished",
            extra={"service": self.service_name, "elapsed_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return result

    def validate(self, *args, **kwargs) -> None:
        """Check the input before ``run``.

        Raises:
            ValidationError: If input is invalid
        """

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Run the core service logic."""
