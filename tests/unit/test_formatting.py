"""Unit tests for history text rendering"""

from dataclasses import replace
from history_gateway.domain.models import (
    ChiefComplaint,
    Duration,
    FamilyHistory,
    HOPData,
    PastHistory,
    PersonalHistory,
)
from history_gateway.domain.formatting import (
    format_active_complaints,
    format_complaint_list,
    format_complaints_for_diagnosis,
    format_conditions,
    format_duration,
    format_hop,
    format_patient_history,
)
from history_gateway.domain.intake import new_patient_history, set_demographics


def test_format_duration_pluralises_and_skips_zero():
    assert format_duration(Duration("1", "2", "0")) == "1 year, 2 months"
    assert format_duration(Duration("", "1", "3")) == "1 month, 3 days"
    assert format_duration(Duration()) == ""


def test_format_conditions():
    assert format_conditions(PastHistory(), "None reported.") == "None reported."
    assert (
        format_conditions(FamilyHistory(has_diabetes=True, has_thyroid=True, other="  Asthma "), "-")
        == "Diabetes Mellitus, Thyroid Disorders, Asthma"
    )
    assert format_conditions(PastHistory(has_tb=True), "-") == "Tuberculosis (TB)"


def test_format_hop_uses_other_progression_text():
    hop = HOPData(site="Epigastrium", progression="Other", progression_other="Worse at night", other="  ")
    text = format_hop(hop)

    assert "    - Site: Epigastrium" in text
    assert "    - Progression: Worse at night" in text
    assert "Other Details" not in text
    assert format_hop(HOPData()) == ""


def test_complaint_renderings_skip_blank_entries():
    complaints = [
        ChiefComplaint(id="1", complaint="Fever", duration=Duration(days="3")),
        ChiefComplaint(id="2", complaint="   "),
        ChiefComplaint(id="3", complaint="Cough"),
    ]

    assert format_complaints_for_diagnosis(complaints) == "Fever (for 3 days), Cough"
    assert format_active_complaints(complaints) == "Fever for 3 days, Cough"
    assert format_complaint_list(complaints) == "- Fever (3 days)\n- Cough"
    assert format_complaints_for_diagnosis(complaints[1:2]) == ""


def test_format_patient_history_defaults():
    history = set_demographics(new_patient_history(), name="Ravi", age="42", family_income="12000")
    history = replace(history, personal_history=PersonalHistory(habits=("Smoking",)))
    text = format_patient_history(history)

    assert "  - Name: Ravi" in text
    assert "  - Total Family Monthly Income: ₹12000" in text
    assert "  - Socio-economic Status: Lower (Calculated)" in text  # 0 + 0 + 3
    assert "No chief complaints reported." in text
    assert "- Past Medical & Surgical History: No significant past history reported." in text
    assert "  - Habits: Smoking" in text
    assert "- Family History: No significant family history reported." in text
