from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.booking import BookingCreate, BookingOut, RejectionOut
from app.services.booking_history_service import get_booking_history
from app.services.booking_service import attempt_booking, get_booking
from app.services.errors import BookingRejected, RejectionReason

router = APIRouter(tags=["bookings"])

REJECTION_STATUS = {
    RejectionReason.SLOT_NOT_OFFERED: 409,
    RejectionReason.SLOT_FULL: 409,
    RejectionReason.DAY_FULL: 409,
    RejectionReason.SERVICE_NOT_FOUND: 404,
    RejectionReason.STORE_UNAVAILABLE: 503,
}


@router.post(
    "/public/bookings",
    response_model=BookingOut,
    status_code=201,
    responses={404: {"model": RejectionOut}, 409: {"model": RejectionOut}, 503: {"model": RejectionOut}},
)
def create_public_booking(body: BookingCreate, db: Session = Depends(get_db)):
    try:
        booking = attempt_booking(db, body.to_request())
    except BookingRejected as e:
        return JSONResponse(
            status_code=REJECTION_STATUS[e.reason],
            content=RejectionOut(reason=e.reason.value, detail=e.detail).model_dump(),
        )
    return BookingOut.from_model(booking)


@router.get("/public/bookings/{booking_id}", response_model=BookingOut)
def get_public_booking(booking_id: str, db: Session = Depends(get_db)):
    b = get_booking(db, booking_id)
    if not b:
        raise HTTPException(status_code=404, detail="Not found")
    return BookingOut.from_model(b)


@router.get("/public/bookings/{booking_id}/history")
def get_public_booking_history(booking_id: str, db: Session = Depends(get_db)):
    if not get_booking(db, booking_id):
        raise HTTPException(status_code=404, detail="Not found")
    return {
        "items": [
            {
                "statusChange": h.status_change,
                "notes": h.notes,
                "timestamp": h.timestamp.isoformat() if h.timestamp else None,
            }
            for h in get_booking_history(db, booking_id)
        ]
    }
