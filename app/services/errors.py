from enum import Enum


class BookingEngineError(Exception):
    pass


class GeometryInputInvalid(BookingEngineError):
    """A zone's stored geometry cannot be used. Only that zone is skipped."""

    def __init__(self, zone_id: str, reason: str):
        self.zone_id = zone_id
        self.reason = reason
        super().__init__(f"zone {zone_id}: invalid geometry: {reason}")


class ConfigurationInvalid(BookingEngineError):
    """pricing_type without its matching multiplier/fixed_price (or an unknown pricing_type)."""

    def __init__(self, zone_id: str, reason: str):
        self.zone_id = zone_id
        self.reason = reason
        super().__init__(f"zone {zone_id}: invalid pricing configuration: {reason}")


class RejectionReason(str, Enum):
    SLOT_NOT_OFFERED = "SLOT_NOT_OFFERED"
    SLOT_FULL = "SLOT_FULL"
    DAY_FULL = "DAY_FULL"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"


class BookingRejected(BookingEngineError):
    def __init__(self, reason: RejectionReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)
