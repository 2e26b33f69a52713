from __future__ import annotations

from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.alerts import (
    evaluate_alerts,
    list_active_alerts,
    list_history,
    mark_read,
    snooze_alert,
)
from src.infrastructure.push.models import DeliveryChannel
from src.infrastructure.scheduler.alert_tasks import Clock
from src.infrastructure.services.alert_delivery_service import AlertDeliveryService
from src.interfaces.http.deps import get_clock, get_delivery_channel, get_farm_tz, get_uow
from src.interfaces.http.schemas.alerts import (
    AlertFeedResponse,
    AlertSchema,
    EvaluationResponse,
    MarkAsReadRequest,
    MarkAsReadResponse,
    NotificationHistoryItem,
    NotificationHistoryResponse,
    RuleFailureSchema,
    SnoozeRequest,
    SnoozeResponse,
)
from src.utils.datetime_tz import local_now

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=AlertFeedResponse)
async def list_alerts(uow=Depends(get_uow), clock: Clock = Depends(get_clock)):
    snapshot = await list_active_alerts.execute(uow, now=clock.now())
    return AlertFeedResponse(
        alerts=[AlertSchema.from_view(view) for view in snapshot.items],
        total=len(snapshot.items),
        unread_count=snapshot.unread_count,
        high_priority_count=snapshot.high_priority_count,
    )


@router.get("/history", response_model=NotificationHistoryResponse)
async def notification_history(
    days: int = Query(30),
    uow=Depends(get_uow),
    clock: Clock = Depends(get_clock),
):
    entries = await list_history.execute(uow, days=days, now=clock.now())
    items = [NotificationHistoryItem.from_domain(e) for e in entries]
    return NotificationHistoryResponse(items=items, total=len(items))


@router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate(
    uow=Depends(get_uow),
    clock: Clock = Depends(get_clock),
    tz: ZoneInfo = Depends(get_farm_tz),
    channel: DeliveryChannel = Depends(get_delivery_channel),
):
    now = clock.now()
    result = await evaluate_alerts.execute(
        uow,
        today=local_now(tz, now).date(),
        now=now,
        delivery_service=AlertDeliveryService(channel, uow.alert_audit),
    )
    delivery = result.delivery
    return EvaluationResponse(
        evaluation_date=result.evaluation_date,
        alerts_found=len(result.alerts),
        new_alerts=len(result.new_alert_ids),
        notifications_sent=delivery.sent if delivery else 0,
        notifications_failed=delivery.failed if delivery else 0,
        failures=[RuleFailureSchema(rule_type=f.rule_type, error=f.error) for f in result.failures],
    )


@router.patch("/mark-read", response_model=MarkAsReadResponse)
async def mark_alerts_read(
    payload: MarkAsReadRequest, uow=Depends(get_uow), clock: Clock = Depends(get_clock)
):
    marked = await mark_read.execute(uow, payload.alert_ids, clock.now)
    return MarkAsReadResponse(marked_count=marked)


@router.post("/mark-all-read", response_model=MarkAsReadResponse)
async def mark_all_alerts_read(uow=Depends(get_uow), clock: Clock = Depends(get_clock)):
    marked = await mark_read.mark_all(uow, clock.now)
    return MarkAsReadResponse(marked_count=marked)


@router.post("/{alert_id}/snooze", response_model=SnoozeResponse)
async def snooze(
    alert_id: UUID,
    payload: SnoozeRequest | None = None,
    uow=Depends(get_uow),
    clock: Clock = Depends(get_clock),
):
    payload = payload or SnoozeRequest()
    until = await snooze_alert.execute(uow, alert_id, payload.duration_hours, clock.now)
    return SnoozeResponse(alert_id=alert_id, snooze_until=until)


@router.delete("/{alert_id}/snooze", status_code=status.HTTP_204_NO_CONTENT)
async def unsnooze(alert_id: UUID, uow=Depends(get_uow), clock: Clock = Depends(get_clock)):
    await snooze_alert.unsnooze(uow, alert_id, clock.now)


@router.post("/{alert_id}/dismiss", response_model=MarkAsReadResponse)
async def dismiss(alert_id: UUID, uow=Depends(get_uow), clock: Clock = Depends(get_clock)):
    changed = await mark_read.dismiss(uow, alert_id, clock.now)
    return MarkAsReadResponse(marked_count=1 if changed else 0)
