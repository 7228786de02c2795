import logging
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response

from .config import Settings, get_settings
from .infrastructure.ledger import InMemorySlotLedger
from .routers import reservations, slots
from .usecases.reservations import BookingEngine
from .utils.request_id import REQUEST_ID_HEADER, bound_request_id


async def request_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    with bound_request_id(request.headers.get(REQUEST_ID_HEADER)) as request_id:
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app(settings: Optional[Settings] = None, engine: Optional[BookingEngine] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    application = FastAPI(title="Reservation API")
    application.state.engine = engine or BookingEngine(
        InMemorySlotLedger(default_capacity=settings.default_slot_capacity),
        settings,
    )
    application.middleware("http")(request_id_middleware)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    application.include_router(slots.router)
    application.include_router(reservations.router)
    return application


app = create_app()
