"""
Navigation side effects of the wizard.
The wizard leaves through one of two routes: the committed project's data
view, or the project listing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from common import constants


class Navigator(ABC):
    """Target of the wizard's navigation."""

    @abstractmethod
    def push(self, path: str) -> None:
        """Navigate to ``path``, keeping the current location in history."""

    @abstractmethod
    def replace(self, path: str) -> None:
        """Navigate to ``path``, replacing the current history entry."""


class HistoryNavigator(Navigator):
    """
    In-memory browser-style history.

    ``events`` keeps every navigation as ``(action, path)``, which the
    Streamlit app and the CLI use to report where the wizard went.
    """

    def __init__(self, start: str = constants.PROJECTS_ROUTE):
        self.entries: List[str] = [start]
        self.events: List[Tuple[str, str]] = []

    @property
    def location(self) -> str:
        return self.entries[-1]

    @property
    def last_event(self) -> Optional[Tuple[str, str]]:
        return self.events[-1] if self.events else None

    def push(self, path: str) -> None:
        self.entries.append(path)
        self.events.append(("push", path))

    def replace(self, path: str) -> None:
        self.entries[-1] = path
        self.events.append(("replace", path))
