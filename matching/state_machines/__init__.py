from .trip_state import TripStateException, cancel_trip, complete_trip, confirm_trip

__all__ = [
    "TripStateException",
    "confirm_trip",
    "cancel_trip",
    "complete_trip",
]
