# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Current transient notification."""
from fastapi import APIRouter, Depends

from presenter_picker.core.dependencies import get_notifier
from presenter_picker.schemas import NotificationResponse
from presenter_picker.services.notifier import Notifier

router = APIRouter(prefix="/api/v1", tags=["Notifications"])


@router.get("/notifications/current", response_model=NotificationResponse)
async def get_current_notification(notifier: Notifier = Depends(get_notifier)):
    return notifier.current()
