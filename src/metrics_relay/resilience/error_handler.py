"""
Error Handler - Circuit Breaker around Remote Submits.

When the remote service keeps failing, there is no point spending a
network timeout on every flush. After enough consecutive failures the
circuit opens and windows are discarded without a request until the
recovery timeout has passed.

Design Notes:
    - No retry: a failed window is never sent again
    - Circuit state is per name, so several clients can share a handler
    - Thread-safe; flushes from different trackers may share a circuit
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"      # Normal operation
    OPEN = "open"          # Failing, reject calls
    HALF_OPEN = "half_open"  # Testing if recovered


class CircuitBreakerOpen(Exception):
    """Raised when circuit breaker is open."""
    pass


@dataclass
class CircuitBreakerConfig:
    """Configuration for circuit breaker."""
    failure_threshold: int = 5  # Failures before opening
    recovery_timeout_seconds: float = 60.0  # Time before half-open
    success_threshold: int = 1  # Successes before closing


@dataclass
class CircuitBreakerState:
    """Mutable state for circuit breaker."""
    state: CircuitState = CircuitState.CLOSED
    failure_count: int = 0
    success_count: int = 0
    last_failure_time: Optional[datetime] = None


class ErrorHandler:
    """Circuit breaker protection for calls to the remote service."""

    def __init__(
        self,
        circuit_breaker_config: Optional[CircuitBreakerConfig] = None,
    ) -> None:
        """
        Initialize error handler.

        Args:
            circuit_breaker_config: Configuration for circuit breaker
        """
        self.circuit_breaker_config = circuit_breaker_config or CircuitBreakerConfig()
        self._circuit_states: Dict[str, CircuitBreakerState] = {}
        self._lock = threading.Lock()

    def with_circuit_breaker(
        self,
        func: Callable[[], T],
        circuit_name: str,
    ) -> T:
        """
        Execute function with circuit breaker protection.

        Args:
            func: Function to execute
            circuit_name: Unique name for this circuit

        Returns:
            Result of successful execution

        Raises:
            CircuitBreakerOpen: When circuit is open
        """
        with self._lock:
            state = self._get_circuit_state(circuit_name)

            if state.state == CircuitState.OPEN:
                if self._should_attempt_recovery(state):
                    state.state = CircuitState.HALF_OPEN
                    logger.info(f"Circuit {circuit_name} entering half-open state")
                else:
                    raise CircuitBreakerOpen(
                        f"Circuit {circuit_name} is open, rejecting call"
                    )

        try:
            result = func()
        except Exception:
            with self._lock:
                self._record_failure(state, circuit_name)
            raise

        with self._lock:
            self._record_success(state, circuit_name)
        return result

    def _get_circuit_state(self, circuit_name: str) -> CircuitBreakerState:
        """Get or create circuit breaker state."""
        if circuit_name not in self._circuit_states:
            self._circuit_states[circuit_name] = CircuitBreakerState()
        return self._circuit_states[circuit_name]

    def _should_attempt_recovery(self, state: CircuitBreakerState) -> bool:
        """Check if enough time has passed to attempt recovery."""
        if state.last_failure_time is None:
            return True
        elapsed = datetime.now() - state.last_failure_time
        return elapsed.total_seconds() >= self.circuit_breaker_config.recovery_timeout_seconds

    def _record_success(self, state: CircuitBreakerState, circuit_name: str) -> None:
        """Record successful execution."""
        if state.state == CircuitState.HALF_OPEN:
            state.success_count += 1
            if state.success_count >= self.circuit_breaker_config.success_threshold:
                state.state = CircuitState.CLOSED
                state.failure_count = 0
                state.success_count = 0
                logger.info(f"Circuit {circuit_name} closed after recovery")
        else:
            state.failure_count = 0

    def _record_failure(self, state: CircuitBreakerState, circuit_name: str) -> None:
        """Record failed execution."""
        state.failure_count += 1
        state.last_failure_time = datetime.now()
        state.success_count = 0

        if state.state == CircuitState.HALF_OPEN:
            state.state = CircuitState.OPEN
            logger.warning(f"Circuit {circuit_name} re-opened after failed recovery")
        elif (
            state.state == CircuitState.CLOSED
            and state.failure_count >= self.circuit_breaker_config.failure_threshold
        ):
            state.state = CircuitState.OPEN
            logger.warning(
                f"Circuit {circuit_name} opened after {state.failure_count} failures"
            )

    def reset_circuit(self, circuit_name: str) -> None:
        """Reset a circuit breaker to closed state."""
        with self._lock:
            if circuit_name in self._circuit_states:
                self._circuit_states[circuit_name] = CircuitBreakerState()
                logger.info(f"Circuit {circuit_name} reset to closed state")

    def get_circuit_state(self, circuit_name: str) -> CircuitState:
        """Get current state of a circuit breaker."""
        with self._lock:
            return self._get_circuit_state(circuit_name).state
