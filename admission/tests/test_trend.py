"""
Tests for the naive linear trend predictor. These pin the exact heuristic:
recent-2 vs older-mean split, earliest-point fallback and the clamped
variance confidence.
"""

import pytest

from admission.logic.contracts import TrendEstimate, InsufficientData
from admission.logic.errors import InvalidInput
from admission.logic.trend import predict_next, yearly_trends, compute_trend


@pytest.fixture
def series(make_record):
    def _series(closings, start_year=2020, category="OC"):
        return [
            make_record(closing - 10, closing, category=category, year=start_year + i)
            for i, closing in enumerate(closings)
        ]
    return _series


def test_five_point_series(series):
    result = predict_next(series([180, 183, 185, 189, 191]), "OC")

    assert isinstance(result, TrendEstimate)
    assert result.trend == pytest.approx(7.33, abs=0.01)
    assert result.predicted_closing == 198
    assert result.direction == "increasing"
    assert result.year == 2025
    # population variance 15.84 -> 100 - 31.68
    assert result.confidence == 68
    assert [p.closing for p in result.historical] == [180, 183, 185, 189, 191]


@pytest.mark.parametrize("closings", [[], [185]])
def test_fewer_than_two_points_is_insufficient(series, closings):
    result = predict_next(series(closings), "OC")

    assert isinstance(result, InsufficientData)
    assert result.points == len(closings)


def test_two_points_use_earliest_as_older_mean(series):
    result = predict_next(series([180, 186]), "OC")

    # recent mean 183, older mean falls back to 180
    assert result.trend == 3
    assert result.predicted_closing == 189
    assert result.confidence == 82


def test_three_points_use_earliest_as_older_mean(series):
    result = predict_next(series([180, 182, 190]), "OC")

    assert result.trend == 6
    assert result.predicted_closing == 196
    assert result.confidence == 63


def test_compute_trend_splits_head_and_tail_from_four_points():
    assert compute_trend([180, 184, 186, 190]) == pytest.approx(188 - 182)


def test_decreasing_series_rounds_half_up(series):
    result = predict_next(series([190, 188, 185, 180]), "OC")

    assert result.trend == -6.5
    assert result.direction == "decreasing"
    # 180 - 6.5 = 173.5
    assert result.predicted_closing == 174


def test_flat_series_caps_confidence_at_95(series):
    result = predict_next(series([185, 185, 185]), "OC")

    assert result.direction == "stable"
    assert result.predicted_closing == 185
    assert result.confidence == 95


def test_noisy_series_floors_confidence_at_60(series):
    result = predict_next(series([100, 180, 120, 190]), "OC")
    assert result.confidence == 60


@pytest.mark.parametrize("closings", [
    [150, 150], [150, 200], [10, 200, 10, 200], [170, 171, 172, 173, 174],
])
def test_confidence_always_within_bounds(series, closings):
    result = predict_next(series(closings), "OC")
    assert 60 <= result.confidence <= 95


def test_predicted_records_are_excluded(make_record):
    records = [
        make_record(170, 180, year=2023),
        make_record(180, 199, year=2024, is_predicted=True),
    ]
    result = predict_next(records, "OC")

    assert isinstance(result, InsufficientData)
    assert result.points == 1


def test_records_without_category_are_skipped(make_record):
    records = [
        make_record(170, 180, year=2021),
        make_record(160, 175, year=2022, category="BC"),
        make_record(172, 184, year=2023),
    ]
    result = predict_next(records, "oc")

    assert [p.year for p in result.historical] == [2021, 2023]
    assert result.year == 2024


def test_series_is_ordered_by_year_and_round(make_record):
    records = [
        make_record(170, 186, year=2023, round="Round 2"),
        make_record(170, 180, year=2022),
        make_record(170, 184, year=2023, round="Round 1"),
    ]
    result = predict_next(records, "OC")

    assert [(p.year, p.round) for p in result.historical] == [
        (2022, "Round 1"), (2023, "Round 1"), (2023, "Round 2"),
    ]


def test_unknown_category_rejected(series):
    with pytest.raises(InvalidInput):
        predict_next(series([180, 185]), "XYZ")


def test_yearly_trends_average_rounds(make_record):
    records = [
        make_record(170, 180, year=2023, round="Round 1"),
        make_record(160, 176, year=2023, round="Round 2"),
        make_record(175, 185, year=2024),
        make_record(180, 199, year=2025, is_predicted=True),
    ]
    trends = yearly_trends(records, "OC")

    assert [t.year for t in trends] == [2023, 2024]
    assert trends[0].opening == 165
    assert trends[0].closing == 178
    assert trends[0].rounds == ["Round 1", "Round 2"]
    assert trends[1].average == 180
