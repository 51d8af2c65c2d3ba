"""Interface for the analytics sink. Delivery is fire-and-forget."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class TelemetrySinkInterface(ABC):
    @abstractmethod
    def is_ready(self) -> bool:
        """Whether events can be captured right now."""
        pass

    @abstractmethod
    def capture(self, event: str, properties: Dict[str, Any]) -> None:
        pass
