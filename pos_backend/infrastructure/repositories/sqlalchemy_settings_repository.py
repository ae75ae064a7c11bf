"""
SQLAlchemy implementation of SettingsRepository
"""

import logging
from typing import Optional

from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.repositories.settings_repository import SettingsRepository
from pos_backend.infrastructure.database.models import AppSettings as SQLAppSettings
from pos_backend.infrastructure.database.operations import DatabaseManager
from pos_backend.infrastructure.utilities.constants import SETTINGS_ROW_ID

_FIELDS = (
    "order_number_format",
    "order_number_prefix",
    "order_number_digits",
    "order_number_reset_daily",
    "theme",
    "font_size",
    "date_format",
    "default_template_id",
    "default_category_id",
    "auto_backup",
    "backup_interval",
    "backup_keep_count",
    "retain_days",
    "updated_at",
)


class SQLAlchemySettingsRepository(SettingsRepository):
    """Reads and writes the single settings row"""

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_settings(self) -> Optional[AppSettings]:
        with self._db.managed_session() as session:
            row = (
                session.query(SQLAppSettings)
                .filter(SQLAppSettings.id == SETTINGS_ROW_ID)
                .first()
            )
            if not row:
                return None
            return AppSettings(
                id=row.id, **{field: getattr(row, field) for field in _FIELDS}
            )

    async def save_settings(self, settings: AppSettings) -> None:
        with self._db.managed_session() as session:
            session.merge(
                SQLAppSettings(
                    id=SETTINGS_ROW_ID,
                    **{field: getattr(settings, field) for field in _FIELDS},
                )
            )
        self._logger.info(
            "⚙️ SETTINGS SAVED: format=%s reset_daily=%s",
            settings.order_number_format,
            settings.order_number_reset_daily,
        )
