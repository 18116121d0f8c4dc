import logging

from fastapi import FastAPI

from app.api.v1.availability import router as availability_router
from app.core.config import settings

CONTEXT_KEYS = (
    "date",
    "staff_id",
    "slot",
    "reason",
    "record_id",
    "resource",
    "bookings",
    "blocks",
    "services",
    "staff",
    "error",
)


class ContextFormatter(logging.Formatter):
    """Appends availability context passed through `extra=` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(extras)}" if extras else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.SALON_NAME} Availability", version="1.0.0")

app.include_router(availability_router, prefix="/api/v1/availability", tags=["availability"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "timezone": settings.SALON_TIMEZONE}
