import random
from datetime import datetime, timedelta, timezone

import pytest

from locations import City, LocationComparator, default_catalog
from locations.catalog import INDIAN_CITIES
from matching.policy import (
    DEFAULT_POLICY,
    DESTINATION_WEIGHT,
    MIN_COMPATIBILITY,
    MatchingPolicy,
    PICKUP_WEIGHT,
    TIME_WEIGHT,
    default_policy,
)
from matching.scoring import compatibility_label, hours_apart, score, time_points
from trips.models import TripCandidate, TripQuery

T = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_candidate(pickup, destination, time=T, candidate_id="c1", created_at=T):
    return TripCandidate(
        id=candidate_id,
        counterparty_id="u1",
        counterparty_name="Asha",
        pickup=pickup,
        destination=destination,
        time=time,
        created_at=created_at,
    )


@pytest.fixture
def bangalore_comparator():
    # Hosur point placed 0.45 degrees (~50 km) north of Koramangala
    catalog = default_catalog().extended(
        [
            ("koramangala", City("Koramangala", 12.9352, 77.6245)),
            ("hosur", City("Hosur", 13.3852, 77.6245)),
        ]
    )
    return LocationComparator(catalog)


def test_identical_trip_scores_full_marks():
    query = TripQuery(pickup="Koramangala", destination="Electronic City", time=T)
    candidate = make_candidate("Koramangala", "Electronic City", T)

    assert score(query, candidate) == 100


def test_same_destination_pickup_50km_three_hours_later(bangalore_comparator):
    query = TripQuery(pickup="Koramangala", destination="Electronic City", time=T)
    candidate = make_candidate("Hosur", "Electronic City", T + timedelta(hours=3))

    # 70 (destination) + 10 (pickup <= 80 km) + 5 (<= 4 h)
    assert score(query, candidate, bangalore_comparator) == 85


def test_nearby_destination_passes_threshold():
    query = TripQuery(pickup="Thane", destination="Mumbai", time=T)
    candidate = make_candidate("Thane", "Pune", T)

    # 15 (Mumbai-Pune <= 150 km) + 20 + 10
    assert score(query, candidate) == 45
    assert score(query, candidate) >= MIN_COMPATIBILITY


def test_distant_destination_falls_below_threshold():
    query = TripQuery(pickup="Thane", destination="Mumbai", time=T)
    candidate = make_candidate("Thane", "Chennai", T)

    assert score(query, candidate) == 30
    assert score(query, candidate) < MIN_COMPATIBILITY


@pytest.mark.parametrize(
    "hours, points",
    [(0, 10), (1, 10), (1.5, 8), (2, 8), (3, 5), (4, 5), (6, 3), (8, 3), (8.01, 0), (30, 0)],
)
def test_time_brackets(hours, points):
    assert time_points(T, T + timedelta(hours=hours)) == points
    assert time_points(T + timedelta(hours=hours), T) == points


@pytest.mark.parametrize("bad_time", ["not a time", "", None, 1234, "2026-13-45T99:00:00"])
def test_unparseable_time_scores_zero_time_points(bad_time):
    query = TripQuery(pickup="Thane", destination="Mumbai", time=T)
    candidate = make_candidate("Thane", "Mumbai", bad_time)

    assert hours_apart(T, bad_time) is None
    assert score(query, candidate) == DESTINATION_WEIGHT + PICKUP_WEIGHT


def test_string_and_naive_timestamps_are_comparable():
    query = TripQuery(pickup="Thane", destination="Mumbai", time="2026-03-01T09:00:00Z")
    naive = make_candidate("Thane", "Mumbai", datetime(2026, 3, 1, 9, 30))
    offset = make_candidate("Thane", "Mumbai", "2026-03-01T14:30:00+05:30")

    assert score(query, naive) == 100
    assert score(query, offset) == 100


def test_unknown_cities_use_the_anchor():
    # Both destinations unknown -> both anchored -> 0 km -> closest bracket
    query = TripQuery(pickup="Thane", destination="Atlantis", time=T)
    candidate = make_candidate("Thane", "Neverland", T)

    assert score(query, candidate) == 50 + 20 + 10


def test_empty_locations_count_as_same_place():
    # two trips with unresolved destinations still share the destination
    query = TripQuery(pickup="Delhi", destination="", time=T)
    assert score(query, make_candidate("Delhi", "", T)) == 100

    # an empty name substring-matches any place
    empty = TripQuery(pickup="", destination="", time=T)
    assert score(empty, make_candidate("Delhi", "Chennai", T)) == 70 + 20 + 10
    assert score(make_candidate("Delhi", "Chennai", T).as_query(), make_candidate("", "", T)) == 100


def test_weights_sum_to_max_score():
    assert DESTINATION_WEIGHT + PICKUP_WEIGHT + TIME_WEIGHT == DEFAULT_POLICY.max_score


@pytest.mark.parametrize(
    "value, label",
    [
        (100, "Excellent Match"),
        (80, "Excellent Match"),
        (79.9, "Good Match"),
        (60, "Good Match"),
        (45, "Fair Match"),
        (40, "Fair Match"),
        (39, "Possible Match"),
        (0, "Possible Match"),
    ],
)
def test_compatibility_label(value, label):
    assert compatibility_label(value) == label


def _random_trips(count, seed=7):
    rng = random.Random(seed)
    places = [name for _, name, _, _ in INDIAN_CITIES] + [
        "Koramangala, Bangalore",
        "Andheri, Mumbai",
        "Puneet Nagar",
        "Atlantis",
        "",
    ]
    trips = []
    for index in range(count):
        trips.append(
            make_candidate(
                rng.choice(places),
                rng.choice(places),
                T + timedelta(minutes=rng.randint(-900, 900)),
                candidate_id=f"c{index}",
            )
        )
    return trips


def test_score_is_bounded_deterministic_and_symmetric():
    trips = _random_trips(60)

    for first in trips:
        for second in trips:
            value = score(first.as_query(), second)

            assert 0 <= value <= 100
            assert score(first.as_query(), second) == value
            assert score(second.as_query(), first) == value


def test_policy_validation_rejects_bad_tables():
    assert default_policy() == DEFAULT_POLICY

    with pytest.raises(ValueError):
        MatchingPolicy(pickup_brackets=((30, 25),)).validate()

    with pytest.raises(ValueError):
        MatchingPolicy(time_brackets=((2, 8), (1, 10))).validate()

    with pytest.raises(ValueError):
        MatchingPolicy(min_compatibility=120).validate()

    with pytest.raises(ValueError):
        MatchingPolicy(destination_weight=-1).validate()
