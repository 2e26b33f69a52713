from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork

_REPOSITORIES = (
    "breeding_records",
    "vaccination_records",
    "inventory_items",
    "animal_flags",
    "app_settings",
    "alerts",
    "notification_states",
    "alert_audit",
    "recipients",
)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._clear_repositories()

    def _clear_repositories(self) -> None:
        for name in _REPOSITORIES:
            setattr(self, name, None)

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.alert_audit_sqlalchemy import AlertAuditSQLAlchemyRepository
        from src.infrastructure.repos.alerts_sqlalchemy import AlertFeedSQLAlchemyRepository
        from src.infrastructure.repos.animal_flags_sqlalchemy import (
            AnimalFlagsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.app_settings_sqlalchemy import (
            AppSettingsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.breeding_records_sqlalchemy import (
            BreedingRecordsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.device_tokens_sqlalchemy import (
            DeviceTokensSQLAlchemyRepository,
        )
        from src.infrastructure.repos.inventory_items_sqlalchemy import (
            InventoryItemsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.notification_states_sqlalchemy import (
            NotificationStatesSQLAlchemyRepository,
        )
        from src.infrastructure.repos.vaccination_records_sqlalchemy import (
            VaccinationRecordsSQLAlchemyRepository,
        )

        self.breeding_records = BreedingRecordsSQLAlchemyRepository(self.session)
        self.vaccination_records = VaccinationRecordsSQLAlchemyRepository(self.session)
        self.inventory_items = InventoryItemsSQLAlchemyRepository(self.session)
        self.animal_flags = AnimalFlagsSQLAlchemyRepository(self.session)
        self.app_settings = AppSettingsSQLAlchemyRepository(self.session)
        self.alerts = AlertFeedSQLAlchemyRepository(self.session)
        self.notification_states = NotificationStatesSQLAlchemyRepository(self.session)
        self.alert_audit = AlertAuditSQLAlchemyRepository(self.session)
        self.recipients = DeviceTokensSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
