"""
Reintentos y rate limiting para el servicio de generación de assets.
Implementa exponential backoff (tenacity) y una ventana deslizante de peticiones.
"""

import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Error genérico de API."""
    pass


class RateLimitError(APIError):
    """Error cuando se excede el rate limit."""
    pass


class AuthenticationError(APIError):
    """Error de autenticación con la API."""
    pass


class AssetGenerationError(APIError):
    """El servicio no pudo generar el asset (o no devolvió URL)."""
    pass


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 30.0,
    multiplier: float = 1.0,
    exceptions: Tuple[type, ...] = (Exception,),
):
    """
    Decorador para reintentar funciones con exponential backoff.

    Args:
        max_attempts: Número máximo de intentos
        min_wait: Espera mínima entre intentos (segundos)
        max_wait: Espera máxima entre intentos (segundos)
        multiplier: Multiplicador del backoff (0 desactiva la espera)
        exceptions: Excepciones que disparan un reintento

    Returns:
        Decorador configurado
    """
    return retry(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class RateLimiter:
    """
    Rate limiter por endpoint con ventana deslizante.

    Cada endpoint admite `requests` peticiones dentro de `period_seconds`;
    si se alcanza el límite, wait_if_needed() duerme hasta que se libere un hueco.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._history: Dict[str, Deque[float]] = {}
        self._limits: Dict[str, Tuple[int, float]] = {
            "default": (60, 60.0),
            "asset_service": (20, 60.0),
        }

    def set_limit(self, endpoint: str, requests: int, period_seconds: float) -> None:
        """
        Configura un límite para un endpoint.

        Args:
            endpoint: Nombre del endpoint
            requests: Número máximo de peticiones
            period_seconds: Período en segundos
        """
        self._limits[endpoint] = (max(1, requests), float(period_seconds))

    def _get_limit(self, endpoint: str) -> Tuple[int, float]:
        return self._limits.get(endpoint, self._limits["default"])

    def _prune(self, history: Deque[float], now: float, period: float) -> None:
        while history and now - history[0] >= period:
            history.popleft()

    def wait_if_needed(self, endpoint: str) -> float:
        """
        Espera si es necesario para cumplir con el rate limit y registra la petición.

        Returns:
            Tiempo esperado en segundos
        """
        requests, period = self._get_limit(endpoint)
        with self._lock:
            history = self._history.setdefault(endpoint, deque())
            now = self._clock()
            self._prune(history, now, period)

            waited = 0.0
            if len(history) >= requests:
                waited = period - (now - history[0])
                if waited > 0:
                    logger.info(f"Rate limit alcanzado para {endpoint}. Esperando {waited:.1f}s")
                    self._sleep(waited)
                now = self._clock()
                self._prune(history, now, period)

            history.append(now)
            return max(waited, 0.0)

    def get_remaining(self, endpoint: str) -> int:
        """Número de peticiones disponibles ahora mismo."""
        requests, period = self._get_limit(endpoint)
        with self._lock:
            history = self._history.get(endpoint, deque())
            self._prune(history, self._clock(), period)
            return max(0, requests - len(history))

    def reset(self, endpoint: Optional[str] = None) -> None:
        """Resetea el historial de un endpoint o de todos."""
        with self._lock:
            if endpoint:
                self._history.pop(endpoint, None)
            else:
                self._history.clear()
