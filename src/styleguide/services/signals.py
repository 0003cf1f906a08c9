# src/styleguide/services/signals.py
from __future__ import annotations

from typing import List

from styleguide.app_logger import get_logger

logger = get_logger(__name__)


class UpdateSignals:
    """
    Collects UI update signals (e.g. ``updatePageTree``) for the backend.

    Advisory only: consumers read them from :attr:`pending`.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []

    def set_update_signal(self, name: str) -> None:
        if name not in self._pending:
            self._pending.append(name)
        logger.info("Update signal set: %s", name)

    @property
    def pending(self) -> List[str]:
        return list(self._pending)
