"""
Settings repository interface
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.settings_entity import AppSettings


class SettingsRepository(ABC):
    """Repository interface for the singleton settings row"""

    @abstractmethod
    async def get_settings(self) -> Optional[AppSettings]:
        """Stored settings, or None before the first save"""

    @abstractmethod
    async def save_settings(self, settings: AppSettings) -> None:
        """Insert or replace the settings row"""
