"""Points rules: each of the seven rules, their boundaries, and the fail-open parsing policy."""

import copy

import pytest

from src.scoring import RULES, calculate_points, points_breakdown


SCENARIO_A = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Pepsi - 12-oz", "price": "12.25"},
        {"shortDescription": "Dasani", "price": "12.25"},
    ],
    "total": "35.35",
}


def _receipt(**overrides) -> dict:
    """Neutral receipt scoring 0 on every rule; override fields per test."""
    base = {
        "retailer": "",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "10:00",
        "items": [],
        "total": "1.10",
    }
    base.update(overrides)
    return base


def test_neutral_receipt_scores_zero():
    assert calculate_points(_receipt()) == 0


def test_scenario_a_scores_twenty():
    """Target, two items, odd day, morning time -> 6 + 5 + 3 + 6 = 20."""
    breakdown = points_breakdown(SCENARIO_A)
    assert breakdown == {
        "retailer": 6,
        "round_dollar": 0,
        "quarter_multiple": 0,
        "item_pairs": 5,
        "item_descriptions": 3,
        "odd_day": 6,
        "afternoon": 0,
        "total": 20,
    }
    assert calculate_points(SCENARIO_A) == 20


def test_round_dollar_also_fires_quarter_multiple():
    """Total 9.00 earns both the round-dollar and the quarter-multiple bonus."""
    breakdown = points_breakdown(_receipt(total="9.00"))
    assert breakdown["round_dollar"] == 50
    assert breakdown["quarter_multiple"] == 25
    assert breakdown["total"] == 75


def test_quarter_multiple_without_round_dollar():
    breakdown = points_breakdown(_receipt(total="35.25"))
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 25


def test_total_not_quarter_multiple():
    breakdown = points_breakdown(_receipt(total="35.35"))
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 0


def test_retailer_counts_ascii_alphanumerics_only():
    assert points_breakdown(_receipt(retailer="M&M Corner Market"))["retailer"] == 14
    assert points_breakdown(_receipt(retailer="Café 7"))["retailer"] == 4
    assert points_breakdown(_receipt(retailer="  -&- "))["retailer"] == 0


@pytest.mark.parametrize(
    "purchase_time, expected",
    [("14:00", 10), ("15:59", 10), ("14:33", 10), ("16:00", 0), ("13:59", 0), ("2:30", 0)],
)
def test_afternoon_window_boundaries(purchase_time, expected):
    assert points_breakdown(_receipt(purchaseTime=purchase_time))["afternoon"] == expected


def test_empty_items_give_no_item_points():
    breakdown = points_breakdown(_receipt(items=[]))
    assert breakdown["item_pairs"] == 0
    assert breakdown["item_descriptions"] == 0


@pytest.mark.parametrize("count, expected", [(1, 0), (2, 5), (3, 5), (4, 10), (5, 10)])
def test_item_pairs(count, expected):
    items = [{"shortDescription": "ab", "price": "1.00"}] * count
    assert points_breakdown(_receipt(items=items))["item_pairs"] == expected


def test_description_length_is_measured_after_trimming():
    """'   Klarbrunn 12-PK 12 FL OZ  ' trims to 24 chars -> ceil(12.00 * 0.2) = 3."""
    items = [{"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 3


def test_each_qualifying_item_contributes_independently():
    items = [
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Dasani", "price": "1.40"},
    ]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 3 + 1


def test_empty_description_qualifies():
    """Zero-length trimmed description is a multiple of 3."""
    items = [{"shortDescription": "   ", "price": "12.25"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 3


def test_negative_price_contributes_nothing():
    items = [{"shortDescription": "abc", "price": "-12.25"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 0


def test_odd_and_even_days():
    assert points_breakdown(_receipt(purchaseDate="2022-03-21"))["odd_day"] == 6
    assert points_breakdown(_receipt(purchaseDate="2022-03-20"))["odd_day"] == 0


def test_malformed_total_is_treated_as_zero():
    """Unparseable total -> 0.0, which is a round-dollar quarter multiple."""
    breakdown = points_breakdown(_receipt(total="abc"))
    assert breakdown["round_dollar"] == 50
    assert breakdown["quarter_multiple"] == 25


def test_malformed_price_is_treated_as_zero():
    items = [{"shortDescription": "abc", "price": "twelve"}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 0


def test_malformed_date_falls_back_to_day_one():
    """Fallback date is January 1 of year 1; day 1 is odd."""
    assert points_breakdown(_receipt(purchaseDate="not-a-date"))["odd_day"] == 6
    assert points_breakdown(_receipt(purchaseDate="2022-02-30"))["odd_day"] == 6
    assert points_breakdown(_receipt(purchaseDate=""))["odd_day"] == 6


def test_malformed_time_falls_back_to_midnight():
    assert points_breakdown(_receipt(purchaseTime="3pm"))["afternoon"] == 0
    assert points_breakdown(_receipt(purchaseTime="15:00:00"))["afternoon"] == 0


def test_empty_receipt_never_raises():
    """All fields blank: round-dollar + quarter + odd-day fallback = 81."""
    receipt = {"retailer": "", "purchaseDate": "", "purchaseTime": "", "items": [], "total": ""}
    assert calculate_points(receipt) == 81


def test_missing_and_wrongly_typed_fields_never_raise():
    receipt = {"retailer": 42, "items": [None, {"price": 3}], "total": None}
    points = calculate_points(receipt)
    assert isinstance(points, int)
    assert points >= 0


def test_breakdown_total_matches_sum_of_rules():
    breakdown = points_breakdown(SCENARIO_A)
    assert list(breakdown) == list(RULES) + ["total"]
    assert breakdown["total"] == sum(breakdown[r] for r in RULES)


def test_scoring_does_not_mutate_receipt():
    receipt = copy.deepcopy(SCENARIO_A)
    calculate_points(receipt)
    assert receipt == SCENARIO_A


def test_description_length_counts_utf8_bytes():
    """'Crème' is 5 characters but 6 bytes, so it qualifies; 'Crèmes' is 6 characters but 7 bytes."""
    qualifying = [{"shortDescription": "Crème", "price": "10.00"}]
    assert points_breakdown(_receipt(items=qualifying))["item_descriptions"] == 2
    not_qualifying = [{"shortDescription": "Crèmes", "price": "10.00"}]
    assert points_breakdown(_receipt(items=not_qualifying))["item_descriptions"] == 0


@pytest.mark.parametrize("total", ["inf", "Infinity", "-inf", "nan", "1e400"])
def test_non_finite_total_earns_no_total_bonuses(total):
    breakdown = points_breakdown(_receipt(total=total))
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 0


@pytest.mark.parametrize("price", ["inf", "nan", "1e400"])
def test_non_finite_price_contributes_nothing(price):
    items = [{"shortDescription": "abc", "price": price}]
    assert points_breakdown(_receipt(items=items))["item_descriptions"] == 0


def test_year_zero_dates_are_valid():
    assert points_breakdown(_receipt(purchaseDate="0000-01-02"))["odd_day"] == 0
    assert points_breakdown(_receipt(purchaseDate="0000-01-03"))["odd_day"] == 6
