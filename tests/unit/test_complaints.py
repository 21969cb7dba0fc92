"""Unit tests for complaint ordering and per-field edits"""

import copy
import pytest
from history_gateway.domain.models import ChiefComplaint, Duration
from history_gateway.domain.complaints import (
    add_complaint,
    duration_to_days,
    new_complaint,
    remove_complaint,
    reorder,
    update_complaint_duration,
    update_complaint_hop,
    update_complaint_text,
)
from history_gateway.domain.exceptions import InvalidFieldError


def complaint(complaint_id: str, years: str = "", months: str = "", days: str = "") -> ChiefComplaint:
    return ChiefComplaint(id=complaint_id, complaint=complaint_id, duration=Duration(years, months, days))


def ids(complaints) -> list[str]:
    return [c.id for c in complaints]


def test_duration_to_days_fixed_constants():
    assert duration_to_days(Duration("1", "0", "0")) == 365
    assert duration_to_days(Duration("0", "1", "0")) == 30
    assert duration_to_days(Duration("2", "3", "4")) == 2 * 365 + 3 * 30 + 4


def test_duration_to_days_unparsable_components_count_as_zero():
    assert duration_to_days(Duration()) == 0
    assert duration_to_days(Duration("abc", "-2", "5")) == 5


def test_duration_to_days_monotonic_per_component():
    """Increasing any single component never decreases the total"""
    for base in (Duration("0", "0", "0"), Duration("1", "11", "29")):
        base_days = duration_to_days(base)
        assert base_days >= 0
        for unit in ("years", "months", "days"):
            for increment in (1, 5, 100):
                bumped = Duration(**{**base.__dict__, unit: str(int(getattr(base, unit)) + increment)})
                assert duration_to_days(bumped) > base_days


def test_reorder_longest_first(sample_complaints):
    """A=365d, B=180d, C=400d -> C, A, B"""
    assert ids(reorder(sample_complaints)) == ["C", "A", "B"]


def test_reorder_is_stable_for_equal_durations():
    entries = [
        complaint("first"),
        complaint("year", years="1"),
        complaint("second", days="0"),
        complaint("twelve-months", months="12", days="5"),
        complaint("third"),
    ]
    # 12 months + 5 days = 365 days, same as one year
    assert ids(reorder(entries)) == ["year", "twelve-months", "first", "second", "third"]


def test_reorder_idempotent(sample_complaints):
    once = reorder(sample_complaints)
    assert reorder(once) == once


def test_reorder_does_not_mutate_input(sample_complaints):
    snapshot = copy.deepcopy(sample_complaints)
    result = reorder(sample_complaints)

    assert sample_complaints == snapshot
    assert result is not sample_complaints


def test_reorder_empty():
    assert reorder([]) == []


def test_update_duration_resorts_whole_list():
    entries = (complaint("A", days="10"), complaint("B", days="20"), complaint("C", days="30"))
    result = update_complaint_duration(entries, "A", "months", "2")

    assert ids(result) == ["A", "C", "B"]
    assert result[0].duration == Duration(years="", months="2", days="10")
    # input untouched
    assert entries[0].duration.months == ""


def test_update_duration_strips_non_digits():
    entries = (complaint("A"),)
    result = update_complaint_duration(entries, "A", "years", "3y-")
    assert result[0].duration.years == "3"


def test_update_duration_unknown_id_keeps_order():
    entries = (complaint("A"), complaint("B", years="1"))
    assert update_complaint_duration(entries, "missing", "days", "5") == entries


def test_update_duration_unknown_unit():
    with pytest.raises(InvalidFieldError):
        update_complaint_duration((complaint("A"),), "A", "weeks", "2")


def test_text_edit_does_not_resort():
    entries = (complaint("A"), complaint("B", years="2"))
    result = update_complaint_text(entries, "A", "Headache")

    assert ids(result) == ["A", "B"]
    assert result[0].complaint == "Headache"


def test_add_appends_without_resort():
    entries = (complaint("A"), complaint("B", years="2"))
    result = add_complaint(entries)

    assert ids(result)[:2] == ["A", "B"]
    assert len(result) == 3
    assert result[2].complaint == ""
    assert result[2].duration == Duration()


def test_new_complaint_ids_are_unique():
    assert len({new_complaint().id for _ in range(50)}) == 50


def test_remove_complaint_keeps_order():
    entries = (complaint("A"), complaint("B", years="2"), complaint("C", years="5"))
    assert ids(remove_complaint(entries, "B")) == ["A", "C"]


def test_hop_progression_other_cleared_when_progression_changes():
    entries = update_complaint_hop((complaint("A"),), "A", progression="Other", progression_other="Cyclical")
    assert entries[0].hop.progression_other == "Cyclical"

    entries = update_complaint_hop(entries, "A", progression="Getting Better")
    assert entries[0].hop.progression == "Getting Better"
    assert entries[0].hop.progression_other == ""


def test_hop_edit_rejects_unknown_field():
    with pytest.raises(InvalidFieldError):
        update_complaint_hop((complaint("A"),), "A", severity="high")


@pytest.mark.parametrize(
    "changes",
    [
        {"onset": "Sudden"},
        {"progression": "Worse"},
        {"site": "Chest", "onset": "acute (min to hr)"},
    ],
)
def test_hop_edit_rejects_values_outside_choices(changes):
    entries = (complaint("A"),)
    with pytest.raises(InvalidFieldError):
        update_complaint_hop(entries, "A", **changes)
    assert entries[0].hop.site == ""


def test_hop_edit_accepts_blank_choice():
    entries = update_complaint_hop((complaint("A"),), "A", onset="Sub-Acute (Days)")
    entries = update_complaint_hop(entries, "A", onset="")
    assert entries[0].hop.onset == ""
