#Purpose: The hosted-backend "adapter/client" (Record Store).
#Sole responsibility: talk to the Supabase PostgREST endpoint via HTTP and
#return TripCandidate objects.
#Encapsulates backend-specific details:
#table/column names (rides, passengers_details, app_users)
#PostgREST filter syntax (status=eq.pending, id=in.(...))
#location columns stored as text or {"address": ...}
#timeouts/error handling
#It should not contain scoring or ranking rules.

import logging
import os
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from trips.models import TripCandidate, TripKind, TripStatus, location_from_record, location_text

# Read backend settings from environment
# Example in .env:
# SUPABASE_URL=https://<project>.supabase.co
# SUPABASE_KEY=<anon or service key>
load_dotenv()
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

logger = logging.getLogger(__name__)

RIDE_COLUMNS = "id,driver_id,pick_up,destination,pickup_time,distance_km,price,status,created_at"
REQUEST_COLUMNS = "id,passenger_id,pickup_location,destination_location,pickup_time,price,status,created_at"
USER_COLUMNS = "id,full_name,phone"


class RecordStoreError(Exception):
    """Raised when the backend rejects a request or cannot be reached."""
    pass


class SupabaseRecordStore:
    """
    Record Store / Supabase client

    Sole responsibility:
    - Talk to PostgREST via HTTP
    - Join offers/requests with their owners (app_users)
    - Resolve location columns to plain text at the boundary
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: int = 5,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or SUPABASE_URL or "").rstrip("/")
        self.api_key = api_key or SUPABASE_KEY
        self.timeout = timeout #the time to wait for the backend before giving up

        if not self.base_url:
            raise ValueError("Supabase URL not set. Please set SUPABASE_URL in the .env file.")
        if not self.api_key:
            raise ValueError("Supabase key not set. Please set SUPABASE_KEY in the .env file.")

        self.session = session or requests.Session()

    #----------------
    # Internal helpers for URL construction, headers, error handling
    #----------------
    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    def _request(self, method: str, table: str, *, params=None, payload=None) -> Any:
        try:
            response = self.session.request(
                method,
                self._url(table),
                params=params,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RecordStoreError(f"Backend unreachable: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RecordStoreError(f"Backend error on {table}: {_error_message(response)}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RecordStoreError(f"Backend returned a non-JSON body on {table}") from e

    def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        return self._request("GET", table, params=params) or []

    def _fetch_users(self, user_ids: List[str], role: str) -> Dict[str, Dict[str, Any]]:
        ids = sorted({uid for uid in user_ids if uid})
        if not ids:
            return {}

        rows = self._select(
            "app_users",
            {
                "select": USER_COLUMNS,
                "id": f"in.({','.join(ids)})",
                "role": f"eq.{role}",
            },
        )
        return {row["id"]: row for row in rows}

    #----------------
    # Public reads
    #----------------
    def fetch_driver_offers(self) -> List[TripCandidate]:
        """
        Pending driver offers (rides table), newest first, with driver details.
        Rides whose driver is not a known driver account are skipped.
        """
        rides = self._select(
            "rides",
            {
                "select": RIDE_COLUMNS,
                "status": f"eq.{TripStatus.PENDING.value}",
                "order": "created_at.desc",
            },
        )
        if not rides:
            return []

        drivers = self._fetch_users([ride.get("driver_id") for ride in rides], role="driver")

        offers: List[TripCandidate] = []
        for ride in rides:
            driver = drivers.get(ride.get("driver_id"))
            status = _row_status(ride, "rides")
            if not driver or status is None:
                continue

            offers.append(
                TripCandidate(
                    id=ride["id"],
                    counterparty_id=ride["driver_id"],
                    counterparty_name=driver.get("full_name") or "",
                    counterparty_phone=driver.get("phone") or None,
                    pickup=location_text(location_from_record(ride.get("pick_up"))),
                    destination=location_text(location_from_record(ride.get("destination"))),
                    time=ride.get("pickup_time"),
                    created_at=ride.get("created_at"),
                    status=status,
                    kind=TripKind.DRIVER_OFFER,
                    price=ride.get("price"),
                    distance_km=ride.get("distance_km"),
                )
            )

        logger.info(f"Fetched {len(offers)} pending driver offers ({len(rides)} rides)")
        return offers

    def fetch_passenger_requests(self) -> List[TripCandidate]:
        """
        Pending passenger requests, newest first, with passenger details.
        """
        rows = self._select(
            "passengers_details",
            {
                "select": REQUEST_COLUMNS,
                "status": f"eq.{TripStatus.PENDING.value}",
                "order": "created_at.desc",
            },
        )
        if not rows:
            return []

        passengers = self._fetch_users([row.get("passenger_id") for row in rows], role="passenger")

        requests_: List[TripCandidate] = []
        for row in rows:
            passenger = passengers.get(row.get("passenger_id"))
            status = _row_status(row, "passengers_details")
            if not passenger or status is None:
                continue

            requests_.append(
                TripCandidate(
                    id=row["id"],
                    counterparty_id=row["passenger_id"],
                    counterparty_name=passenger.get("full_name") or "",
                    counterparty_phone=passenger.get("phone") or None,
                    pickup=location_text(location_from_record(row.get("pickup_location"))),
                    destination=location_text(location_from_record(row.get("destination_location"))),
                    time=row.get("pickup_time"),
                    created_at=row.get("created_at"),
                    status=status,
                    kind=TripKind.PASSENGER_REQUEST,
                    price=row.get("price"),
                    passenger_count=1,
                )
            )

        logger.info(f"Fetched {len(requests_)} pending passenger requests ({len(rows)} rows)")
        return requests_

    #----------------
    # Public writes
    #----------------
    def save_passenger_request(self, passenger_id: str, pickup: str, destination: str, pickup_time: str) -> None:
        self._request(
            "POST",
            "passengers_details",
            payload={
                "passenger_id": passenger_id,
                "pickup_location": {"address": pickup},
                "destination_location": {"address": destination},
                "pickup_time": pickup_time,
                "status": TripStatus.PENDING.value,
            },
        )

    def update_ride_status(self, ride_id: str, status: TripStatus) -> None:
        self._request(
            "PATCH",
            "rides",
            params={"id": f"eq.{ride_id}"},
            payload={"status": status.value},
        )

    def update_passenger_request(self, request_id: str, status: TripStatus, driver_id: Optional[str] = None) -> None:
        payload: Dict[str, Any] = {"status": status.value}
        if driver_id:
            payload["driver_id"] = driver_id

        self._request(
            "PATCH",
            "passengers_details",
            params={"id": f"eq.{request_id}"},
            payload=payload,
        )


def _row_status(row: Dict[str, Any], table: str) -> Optional[TripStatus]:
    # a missing status means the row was never updated, so it is still pending
    try:
        return TripStatus(row.get("status") or TripStatus.PENDING.value)
    except ValueError:
        logger.warning(f"Skipping {table} row {row.get('id')}: unknown status {row.get('status')!r}")
        return None


def _error_message(response) -> str:
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"

    if isinstance(data, dict):
        return data.get("message") or data.get("error") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"
