from dataclasses import replace

from trips.models import TripCandidate, TripStatus


class TripStateException(Exception):
    """Raised when an invalid trip status transition is attempted."""
    pass


def confirm_trip(trip: TripCandidate) -> TripCandidate:
    """
    Called when a passenger books a driver offer, or a driver accepts a
    passenger request. Only a PENDING trip can be confirmed.
    """
    if trip.status != TripStatus.PENDING:
        raise TripStateException(f"Cannot confirm trip {trip.id} from {trip.status.value}")

    # TripCandidate is a frozen dataclass, so we return a new instance via replace
    return replace(trip, status=TripStatus.CONFIRMED)


def cancel_trip(trip: TripCandidate) -> TripCandidate:
    """
    Either side backs out before the ride happens.
    """
    if trip.status not in (TripStatus.PENDING, TripStatus.CONFIRMED):
        raise TripStateException(f"Cannot cancel trip {trip.id} from {trip.status.value}")

    return replace(trip, status=TripStatus.CANCELLED)


def complete_trip(trip: TripCandidate) -> TripCandidate:
    """
    The shared ride took place.
    """
    if trip.status != TripStatus.CONFIRMED:
        raise TripStateException(f"Trip {trip.id} is not CONFIRMED. Current: {trip.status.value}")

    return replace(trip, status=TripStatus.COMPLETED)
