import pandas as pd
import numpy as np
import uuid
from datetime import datetime, timezone, timedelta

from locations.catalog import INDIAN_CITIES

# Places that should hit the substring rule against catalog cities
NEIGHBOURHOODS = {
    "bangalore": ["Koramangala, Bangalore", "Electronic City, Bangalore", "Whitefield, Bangalore"],
    "mumbai": ["Andheri, Mumbai", "Bandra, Mumbai"],
    "pune": ["Hinjewadi, Pune", "Kothrud, Pune"],
    "delhi": ["Connaught Place, Delhi"],
}


def generate_mock_trips(num_trips=200, output_file="mock_trips.csv", seed=None):
    """
    Generates pending driver offers between catalog cities, with a bias
    towards a few busy corridors so that searches produce real matches.
    """
    rng = np.random.default_rng(seed)
    now = datetime.now(timezone.utc)

    city_names = [name for _, name, _, _ in INDIAN_CITIES]
    busy = ["Mumbai", "Pune", "Bangalore", "Delhi"]

    data = []
    for trip_index in range(num_trips):
        # 70% of offers run along busy corridors
        pool = busy if rng.random() < 0.7 else city_names
        pickup_city, destination_city = rng.choice(pool, size=2, replace=False)

        pickup = _maybe_neighbourhood(rng, pickup_city)
        destination = _maybe_neighbourhood(rng, destination_city)

        pickup_time = now + timedelta(hours=float(rng.uniform(0, 48)))
        created_at = now - timedelta(minutes=int(rng.integers(0, 24 * 60)))

        data.append({
            "id": f"ride_{str(trip_index+1).zfill(5)}",
            "driver_id": f"drv_{str(uuid.uuid4())[:8]}",
            "driver_name": f"Driver {trip_index+1}",
            "pick_up": pickup,
            "destination": destination,
            "pickup_time": pickup_time.isoformat(),
            "price": np.round(rng.uniform(200, 2500), 0),
            "status": rng.choice(["pending", "confirmed", "cancelled"], p=[0.85, 0.1, 0.05]),
            "created_at": created_at.isoformat(),
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_trips} driver offers and saved to '{output_file}'")

    print("\nTop 5 Corridors:")
    counts = (df["pick_up"] + " -> " + df["destination"]).value_counts().head(5)
    for corridor, count in counts.items():
        print(f"  {corridor}: {count} offers")
    return df


def _maybe_neighbourhood(rng, city: str) -> str:
    options = NEIGHBOURHOODS.get(city.lower())
    if options and rng.random() < 0.5:
        return str(rng.choice(options))
    return str(city)


if __name__ == "__main__":
    generate_mock_trips(num_trips=200)
