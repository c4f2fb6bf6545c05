import uuid, json
from sqlalchemy.orm import Session
from app.models.booking_history import BookingHistory

def log_booking_event(
    db: Session,
    booking_id: str,
    status_change: str,
    notes: str | None = None,
    changed_by_user_id: str | None = None,
    details: dict | None = None,
):
    db.add(BookingHistory(
        id=str(uuid.uuid4()),
        booking_id=booking_id,
        status_change=status_change,
        changed_by_user_id=changed_by_user_id,
        notes=notes,
        details_json=json.dumps(details or {}, ensure_ascii=False, default=str),
    ))

def get_booking_history(db: Session, booking_id: str) -> list[BookingHistory]:
    return (
        db.query(BookingHistory)
        .filter(BookingHistory.booking_id == booking_id)
        .order_by(BookingHistory.timestamp.desc())
        .all()
    )
