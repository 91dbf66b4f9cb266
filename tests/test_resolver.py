from delivery_coverage.models.domain import (
    Branch,
    Covered,
    DeliveryUnavailable,
    NotCovered,
    NOT_COVERED_MESSAGE,
    Point,
    Zone,
)
from delivery_coverage.services.coverage import resolve


def _square(south: float, west: float, size: float = 0.10) -> tuple[Point, ...]:
    return (
        Point(south, west),
        Point(south, west + size),
        Point(south + size, west + size),
        Point(south + size, west),
    )


def _branch(branch_id, name: str, zones, delivery=True, active=True) -> Branch:
    return Branch(
        id=branch_id,
        name=name,
        zones=zones,
        is_active=active,
        is_delivery_available=delivery,
        opening_time="10:00",
        closing_time="23:00",
    )


CENTER = Zone(name="Center", delivery_fee=15.0, polygon=_square(30.00, 31.00))
INSIDE = Point(30.05, 31.05)


def test_scenario_covered():
    decision = resolve([_branch(1, "Downtown", (CENTER,))], INSIDE)

    assert decision == Covered(
        branch_id=1,
        branch_name="Downtown",
        zone_name="Center",
        delivery_fee=15.0,
        opening_time="10:00",
        closing_time="23:00",
    )


def test_scenario_outside_every_zone():
    decision = resolve([_branch(1, "Downtown", (CENTER,))], Point(31.00, 32.00))

    assert isinstance(decision, NotCovered)
    assert decision.message == NOT_COVERED_MESSAGE


def test_scenario_delivery_disabled_branch():
    decision = resolve([_branch(1, "Downtown", (CENTER,), delivery=False)], INSIDE)

    assert isinstance(decision, DeliveryUnavailable)
    assert decision.branch_name == "Downtown"
    assert decision.zone_name == "Center"
    assert not hasattr(decision, "delivery_fee")


def test_enabled_branch_wins_even_when_listed_after_disabled_one():
    disabled = _branch(2, "Harbor", (Zone("Harbor Wide", 5.0, _square(29.95, 30.95, 0.2)),), delivery=False)
    enabled = _branch(1, "Downtown", (CENTER,))

    decision = resolve([disabled, enabled], INSIDE)

    assert isinstance(decision, Covered)
    assert decision.branch_id == 1
    assert decision.zone_name == "Center"


def test_first_matching_zone_in_list_order_wins():
    overlapping = Zone(name="Old Town", delivery_fee=20.0, polygon=_square(29.95, 30.95, 0.2))
    first = _branch(1, "Downtown", (Zone("Elsewhere", 1.0, _square(10.0, 10.0)), overlapping, CENTER))
    second = _branch(2, "Uptown", (CENTER,))

    decision = resolve([first, second], INSIDE)

    assert decision.branch_id == 1
    assert decision.zone_name == "Old Town"
    assert decision.delivery_fee == 20.0


def test_first_disabled_match_reported_when_no_enabled_match():
    enabled_elsewhere = _branch(1, "Airport", (Zone("Terminal", 30.0, _square(10.0, 10.0)),))
    disabled_a = _branch(2, "Harbor", (CENTER,), delivery="false")
    disabled_b = _branch(3, "Market", (CENTER,), delivery=False)

    decision = resolve([enabled_elsewhere, disabled_a, disabled_b], INSIDE)

    assert isinstance(decision, DeliveryUnavailable)
    assert decision.branch_id == 2


def test_no_match_carries_no_branch_identity():
    decision = resolve([_branch(1, "Downtown", (CENTER,), delivery=False)], Point(-10.0, -10.0))

    assert decision == NotCovered()
    assert not hasattr(decision, "branch_id")


def test_delivery_flag_is_opt_out():
    for flag in (True, None, "true", "yes", 0, "False", ""):
        decision = resolve([_branch(1, "Downtown", (CENTER,), delivery=flag)], INSIDE)
        assert isinstance(decision, Covered), flag

    for flag in (False, "false"):
        decision = resolve([_branch(1, "Downtown", (CENTER,), delivery=flag)], INSIDE)
        assert isinstance(decision, DeliveryUnavailable), flag


def test_inactive_branches_are_ignored():
    inactive = _branch(1, "Closed", (CENTER,), active=False)
    inactive_disabled = _branch(2, "Closed Too", (CENTER,), delivery=False, active=False)

    assert isinstance(resolve([inactive, inactive_disabled], INSIDE), NotCovered)


def test_missing_zone_lists_and_degenerate_polygons_are_skipped():
    broken = [
        _branch(1, "No Zones", None),
        _branch(2, "Bad Zones", "not-a-list"),
        _branch(3, "Degenerate", (Zone("Line", 1.0, (Point(30.0, 31.0), Point(30.1, 31.1))),)),
        _branch(4, "Downtown", (CENTER,)),
    ]

    decision = resolve(broken, INSIDE)

    assert isinstance(decision, Covered)
    assert decision.branch_id == 4


def test_empty_snapshot_is_not_covered():
    assert isinstance(resolve([], INSIDE), NotCovered)


def test_resolve_accepts_generators():
    decision = resolve((branch for branch in [_branch(1, "Downtown", (CENTER,), delivery=False)]), INSIDE)

    assert isinstance(decision, DeliveryUnavailable)


def test_zones_with_non_point_vertices_never_match():
    raw_vertices = Zone(
        name="Raw",
        delivery_fee=5.0,
        polygon=({"lat": 30.0, "lng": 31.0}, {"lat": 30.0, "lng": 31.1}, {"lat": 30.1, "lng": 31.1}),
    )
    mixed = Zone(name="Mixed", delivery_fee=5.0, polygon=CENTER.polygon[:3] + ([30.1, 31.0],))
    branches = [_branch(1, "Raw", (raw_vertices, mixed)), _branch(2, "Downtown", (CENTER,))]

    decision = resolve(branches, INSIDE)

    assert isinstance(decision, Covered)
    assert decision.branch_id == 2
    assert isinstance(resolve(branches[:1], INSIDE), NotCovered)
