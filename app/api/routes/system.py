from fastapi import APIRouter, Response, status

from infrastructure.services import NotificationServiceDep, SettingsDep

router = APIRouter(tags=["System"])


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
def get_health():
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.get("/health/notifications")
def get_notification_health(
    notifications: NotificationServiceDep, response: Response
):
    """Per-channel sender health. Responds 503 when any sender is unhealthy."""
    channels = notifications.health_check()
    healthy = all(channels.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "ok" if healthy else "degraded", "channels": channels}
