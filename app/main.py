from fastapi import FastAPI

from app.api.v1.store import router as store_router
from app.core.config import settings
from app.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.STORE_NAME} Availability & Booking", version="1.0.0")

app.include_router(store_router, prefix="/api/v1", tags=["store"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
