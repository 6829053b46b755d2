import csv
import os
import time
from datetime import datetime, timedelta, timezone
from typing import List

import pandas as pd

from matching.ranking import rank_candidates
from trips.models import TripCandidate, TripKind, TripQuery

SAMPLE_SEARCHES = [
    ("Andheri, Mumbai", "Pune", 2),
    ("Koramangala, Bangalore", "Chennai", 6),
    ("Delhi", "Jaipur", 12),
    ("Thane", "Mumbai", 1),
]


def load_offers(filepath="mock_trips.csv") -> List[TripCandidate]:
    # Resolve the correct path depending on where the user runs the script from.
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    df = pd.read_csv(os.path.join(base_dir, filepath))

    offers = []
    for _, row in df.iterrows():
        offers.append(
            TripCandidate.new(
                candidate_id=str(row["id"]),
                counterparty_id=str(row["driver_id"]),
                counterparty_name=str(row["driver_name"]),
                pickup=row["pick_up"],
                destination=row["destination"],
                time=row["pickup_time"],
                created_at=row["created_at"],
                status=row["status"],
                kind=TripKind.DRIVER_OFFER,
                price=float(row["price"]),
            )
        )
    return offers


def run_simulation():
    print("=== STARTING MATCHING SIMULATION ===")

    offers = load_offers("mock_trips.csv")
    print(f"Loaded {len(offers)} driver offers.\n")

    now = datetime.now(timezone.utc)
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    output_path = os.path.join(base_dir, "matching_results.csv")

    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["search", "ride_id", "pickup", "destination", "score", "label"])

        for pickup, destination, hours_ahead in SAMPLE_SEARCHES:
            query = TripQuery(pickup=pickup, destination=destination, time=now + timedelta(hours=hours_ahead))

            start_time = time.time()
            matches = rank_candidates(query, offers)
            elapsed = time.time() - start_time

            search = f"{pickup} -> {destination} (+{hours_ahead}h)"
            print(f"--- {search}: {len(matches)} matches in {elapsed * 1000:.1f}ms")

            if not matches:
                writer.writerow([search, "NONE", "", "", "", ""])
                print("  No matching drivers found. Drivers will be notified of your request!")
                continue

            for match in matches[:5]:
                offer = match.candidate
                print(f"  {match.compatibility_score:5.1f}% {match.label:<16} {offer.id}: {offer.pickup} -> {offer.destination}")

            for match in matches:
                offer = match.candidate
                writer.writerow([search, offer.id, offer.pickup, offer.destination, match.compatibility_score, match.label])

    print("\n=== SIMULATION COMPLETE ===")
    print("Results written to 'matching_results.csv'.")


if __name__ == "__main__":
    run_simulation()
