from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query

from src.application.use_cases.reproduction import get_worklist
from src.application.use_cases.settings.alert_config import load_alert_config
from src.infrastructure.scheduler.alert_tasks import Clock
from src.interfaces.http.deps import get_clock, get_farm_tz, get_uow
from src.interfaces.http.schemas.worklist import WorklistItem, WorklistResponse
from src.utils.datetime_tz import local_now

router = APIRouter(prefix="/worklist", tags=["reproduction"])


@router.get("", response_model=WorklistResponse)
async def list_worklist(
    filter_: str = Query("all", alias="filter"),
    include_delivered: bool = Query(False),
    uow=Depends(get_uow),
    clock: Clock = Depends(get_clock),
    tz: ZoneInfo = Depends(get_farm_tz),
):
    query = get_worklist.WorklistQuery(
        today=local_now(tz, clock.now()).date(),
        filter=filter_,
        include_delivered=include_delivered,
    )
    entries = await get_worklist.execute(uow, query)
    config = await load_alert_config(uow)
    items = [WorklistItem.from_entry(e, config.expected_gestation_days) for e in entries]
    return WorklistResponse(items=items, total=len(items))
