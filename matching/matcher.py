"""
Purpose: Orchestrator / matching pipeline (the "glue").
What it does:
Pulls pending offers or requests from the record store, ranks them against the
user's trip, and carries out the booking/acceptance status changes. Also checks
newly posted passenger requests against a driver's ride and notifies the driver.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from locations import LocationComparator
from trips.models import ScoredCandidate, TripCandidate, TripQuery, TripStatus
from store.supabase_client import RecordStoreError

from .policy import DEFAULT_POLICY
from .ranking import rank_candidates
from .scoring import compatibility_label, score
from .state_machines.trip_state import confirm_trip

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """
    Ranked matches for one search. `error` carries the store's message
    when the candidates could not be fetched.
    """
    matches: List[ScoredCandidate] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Matcher:
    """
    Coordinates record store + ranking for both search directions.
    """
    def __init__(self, record_store, notification_service=None, comparator: Optional[LocationComparator] = None):
        self.record_store = record_store
        self.notification_service = notification_service
        self.comparator = comparator

    def find_matching_drivers(self, query: TripQuery) -> MatchResult:
        """
        Passenger -> drivers: rank pending driver offers against the passenger's trip.
        """
        try:
            offers = self.record_store.fetch_driver_offers()
        except RecordStoreError as e:
            logger.error(f"Error finding matching drivers: {e}")
            return MatchResult(error=str(e))

        matches = rank_candidates(query, offers, self.comparator)
        logger.info(f"{len(matches)} of {len(offers)} driver offers matched {query.pickup} -> {query.destination}")
        return MatchResult(matches=matches)

    def find_matching_passengers(self, query: TripQuery) -> MatchResult:
        """
        Driver -> passengers: same ranking with the driver's ride as the query.
        """
        try:
            requests_ = self.record_store.fetch_passenger_requests()
        except RecordStoreError as e:
            logger.error(f"Error finding matching passengers: {e}")
            return MatchResult(error=str(e))

        matches = rank_candidates(query, requests_, self.comparator)
        logger.info(f"{len(matches)} of {len(requests_)} passenger requests matched {query.pickup} -> {query.destination}")
        return MatchResult(matches=matches)

    def request_ride(self, passenger_id: str, query: TripQuery) -> MatchResult:
        """
        Post the passenger's request, then look for drivers right away.
        An empty result means drivers will see the request when they search.
        """
        pickup_time = query.time.isoformat() if hasattr(query.time, "isoformat") else query.time
        try:
            self.record_store.save_passenger_request(passenger_id, query.pickup, query.destination, pickup_time)
        except RecordStoreError as e:
            logger.error(f"Error saving passenger request: {e}")
            return MatchResult(error=str(e))

        return self.find_matching_drivers(query)

    def check_new_request(self, query: TripQuery, request: TripCandidate) -> Optional[ScoredCandidate]:
        """
        Called when a new passenger request is posted while a driver has a ride
        selected. Notifies the driver if the request clears the threshold.
        """
        if request.status != TripStatus.PENDING:
            return None

        value = score(query, request, self.comparator)
        if value < DEFAULT_POLICY.min_compatibility:
            return None

        scored = ScoredCandidate(candidate=request, compatibility_score=value, label=compatibility_label(value))
        if self.notification_service:
            self.notification_service.notify_match(query, scored)
        return scored

    def book_driver(self, offer: TripCandidate) -> TripCandidate:
        """
        Passenger books a driver offer. Raises TripStateException if the offer
        is no longer pending; RecordStoreError propagates to the caller.
        """
        confirmed = confirm_trip(offer)
        self.record_store.update_ride_status(offer.id, TripStatus.CONFIRMED)
        return confirmed

    def accept_ride_request(self, request: TripCandidate, ride_id: str, driver_id: str) -> TripCandidate:
        """
        Driver accepts a passenger request for one of their rides: the request
        is confirmed and assigned to the driver, and the ride is confirmed too.

        The two writes are not atomic. If the ride update fails, the request
        stays confirmed in the store and the RecordStoreError propagates; the
        caller must reconcile (retry the ride update or cancel the request).
        """
        confirmed = confirm_trip(request)
        self.record_store.update_passenger_request(request.id, TripStatus.CONFIRMED, driver_id=driver_id)
        try:
            self.record_store.update_ride_status(ride_id, TripStatus.CONFIRMED)
        except RecordStoreError as e:
            logger.error(f"Request {request.id} confirmed but ride {ride_id} was not: {e}")
            raise
        return confirmed
