# backend/raven/services/base.py
"""
Base Service for Raven

Every service owns a session, a class-named logger and per-operation timing.
Repositories never commit; ``transaction()`` is the only place a service
commits or rolls back.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
import logging
import time
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class OperationStats:
    """Running timings for one service operation."""

    count: int = 0
    success_count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0

    @property
    def failure_count(self) -> int:
        return self.count - self.success_count

    def record(self, elapsed: float, success: bool) -> None:
        self.count += 1
        self.total_time += elapsed
        self.min_time = min(self.min_time, elapsed)
        self.max_time = max(self.max_time, elapsed)
        if success:
            self.success_count += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "avg_time": self.total_time / self.count,
            "min_time": self.min_time,
            "max_time": self.max_time,
            "total_time": self.total_time,
            "success_rate": self.success_count / self.count,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
        }


class BaseService:
    """Shared session handling, logging and timing for service classes."""

    # service class name -> operation -> stats
    _stats: Dict[str, Dict[str, OperationStats]] = {}

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit on success, roll back on any error.

        Database errors surface as ``ServiceException``; anything else is
        re-raised unchanged after the rollback.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Transaction rolled back: {str(e)}")
            raise ServiceException(f"Database operation failed: {str(e)}")
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Time a service method and record the outcome.

        Usage:
            @BaseService.measure_operation("get_availability")
            def get_availability(self, ...):
                ...
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self, *args, **kwargs):
                started = time.perf_counter()
                error_type: Optional[str] = None
                try:
                    return func(self, *args, **kwargs)
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    self._record_operation(
                        operation_name, time.perf_counter() - started, error_type
                    )

            return cast(F, wrapper)

        return decorator

    def _record_operation(
        self, operation_name: str, elapsed: float, error_type: Optional[str]
    ) -> None:
        service_name = self.__class__.__name__
        stats = BaseService._stats.setdefault(service_name, {})
        stats.setdefault(operation_name, OperationStats()).record(elapsed, error_type is None)

        if elapsed > settings.slow_operation_threshold_seconds:
            self.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")

        if settings.prometheus_enabled:
            prometheus_metrics.record_service_operation(
                service=service_name,
                operation=operation_name,
                duration=elapsed,
                status="error" if error_type else "success",
                error_type=error_type,
            )

    def log_operation(self, operation: str, **context: Any) -> None:
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})

    def get_metrics(self) -> Dict[str, Any]:
        """Timing summary per measured operation of this service class."""
        return {
            operation: stats.as_dict()
            for operation, stats in BaseService._stats.get(self.__class__.__name__, {}).items()
            if stats.count
        }

    def reset_metrics(self) -> None:
        BaseService._stats.pop(self.__class__.__name__, None)
        self.logger.info(f"Metrics reset for {self.__class__.__name__}")
