"""
Purpose: Domain models for the Trips capability.
What it does:
- Defines core data structures:
- TripQuery (pickup, destination, time) - the trip being matched
- TripCandidate (a stored driver offer or passenger request)
- ScoredCandidate (candidate + compatibility score)
- LocationRef = Address | Unresolved (boundary shape of a location column)

Defines enums/constants:
- TripStatus = PENDING | CONFIRMED | CANCELLED | COMPLETED
- TripKind = DRIVER_OFFER | PASSENGER_REQUEST

Rule: No HTTP calls, no scoring logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

# Backend rows carry ISO-8601 strings; callers may also pass datetimes.
Timestamp = Union[datetime, str, None]


class TripStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class TripKind(str, Enum):
    DRIVER_OFFER = "driver_offer"
    PASSENGER_REQUEST = "passenger_request"


@dataclass(frozen=True)
class Address:
    text: str


@dataclass(frozen=True)
class Unresolved:
    pass


LocationRef = Union[Address, Unresolved]


def location_from_record(value: Any) -> LocationRef:
    """
    Resolve a raw location column into a LocationRef.

    The backend stores locations either as plain text or as a JSON object
    with an "address" key (passenger requests). Anything else is Unresolved.
    """
    if isinstance(value, dict):
        value = value.get("address")

    if isinstance(value, str) and value.strip():
        return Address(value)

    return Unresolved()


def location_text(ref: LocationRef) -> str:
    if isinstance(ref, Address):
        return ref.text
    return ""


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Parse a backend timestamp into an aware datetime.
    Naive values are taken as UTC. Returns None when the value is unusable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class TripQuery:
    """
    The trip a user is currently trying to match, either a passenger
    looking for a ride or a driver looking for passengers.
    """
    pickup: str
    destination: str
    time: Timestamp


@dataclass(frozen=True)
class TripCandidate:
    """
    A stored offer or request. Read-only input to the scorer; status
    changes go through matching.state_machines.trip_state.
    """
    id: str
    counterparty_id: str
    counterparty_name: str
    pickup: str
    destination: str
    time: Timestamp
    created_at: Timestamp
    status: TripStatus = TripStatus.PENDING
    kind: TripKind = TripKind.DRIVER_OFFER

    counterparty_phone: Optional[str] = None
    price: Optional[float] = None

    # Driver offers carry a route distance, passenger requests a head count.
    distance_km: Optional[float] = None
    passenger_count: int = 1

    @classmethod
    def new(
        cls,
        candidate_id: str,
        counterparty_id: str,
        counterparty_name: str,
        pickup: Any,
        destination: Any,
        time: Timestamp,
        created_at: Timestamp = None,
        status: str | TripStatus = TripStatus.PENDING,
        kind: str | TripKind = TripKind.DRIVER_OFFER,
        **extra: Any,
    ) -> TripCandidate:
        # Locations may arrive as text or {"address": ...}; always store text.
        if isinstance(status, str):
            status = TripStatus(status)
        if isinstance(kind, str):
            kind = TripKind(kind)

        return cls(
            id=candidate_id,
            counterparty_id=counterparty_id,
            counterparty_name=counterparty_name,
            pickup=location_text(location_from_record(pickup)),
            destination=location_text(location_from_record(destination)),
            time=time,
            created_at=created_at,
            status=status,
            kind=kind,
            **extra,
        )

    def as_query(self) -> TripQuery:
        return TripQuery(pickup=self.pickup, destination=self.destination, time=self.time)


@dataclass(frozen=True)
class ScoredCandidate:
    """
    Output of ranking: a candidate plus its compatibility score (0-100).
    """
    candidate: TripCandidate
    compatibility_score: float
    label: str = field(default="")

    @property
    def id(self) -> str:
        return self.candidate.id

    @property
    def created_at(self) -> Timestamp:
        return self.candidate.created_at

    def as_dict(self) -> Dict[str, Any]:
        """
        Flat view for the UI/notification layer: candidate fields plus
        score and label.
        """
        c = self.candidate
        return {
            "id": c.id,
            "kind": c.kind.value,
            "counterparty_id": c.counterparty_id,
            "counterparty_name": c.counterparty_name,
            "counterparty_phone": c.counterparty_phone,
            "pickup_location": c.pickup,
            "destination_location": c.destination,
            "pickup_time": c.time.isoformat() if isinstance(c.time, datetime) else c.time,
            "price": c.price,
            "distance_km": c.distance_km,
            "passenger_count": c.passenger_count,
            "status": c.status.value,
            "created_at": c.created_at.isoformat() if isinstance(c.created_at, datetime) else c.created_at,
            "compatibility_score": self.compatibility_score,
            "compatibility_label": self.label,
        }
