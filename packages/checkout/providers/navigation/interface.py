"""Interfaces for the host's router and user-facing alerts."""

from abc import ABC, abstractmethod


class NavigatorInterface(ABC):
    @abstractmethod
    def push(self, url: str) -> None:
        """Navigate to url. Must not block."""
        pass


class NotifierInterface(ABC):
    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a blocking-style message to the user."""
        pass
