from fastapi import HTTPException, Request, status

from .usecases.reservations import BookingEngine


def get_engine(request: Request) -> BookingEngine:
    engine = getattr(request.app.state, "engine", None)
    if not isinstance(engine, BookingEngine):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="booking engine not initialized")
    return engine
