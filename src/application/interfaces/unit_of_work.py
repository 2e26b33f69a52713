from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.alert_audit import AlertAuditRepository
from src.application.interfaces.repositories.alerts import AlertFeedRepository
from src.application.interfaces.repositories.animal_flags import AnimalFlagsRepository
from src.application.interfaces.repositories.app_settings import AppSettingsRepository
from src.application.interfaces.repositories.breeding_records import BreedingRecordsRepository
from src.application.interfaces.repositories.inventory_items import InventoryItemsRepository
from src.application.interfaces.repositories.notification_states import (
    NotificationStateRepository,
)
from src.application.interfaces.repositories.recipients import RecipientsRepository
from src.application.interfaces.repositories.vaccination_records import (
    VaccinationRecordsRepository,
)


class UnitOfWork(Protocol):
    breeding_records: BreedingRecordsRepository
    vaccination_records: VaccinationRecordsRepository
    inventory_items: InventoryItemsRepository
    animal_flags: AnimalFlagsRepository
    app_settings: AppSettingsRepository
    alerts: AlertFeedRepository
    notification_states: NotificationStateRepository
    alert_audit: AlertAuditRepository
    recipients: RecipientsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
