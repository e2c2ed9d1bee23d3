"""Blood pressure classification.

Categories follow the ACC/AHA hypertension thresholds. The threshold rules
overlap, so ``classify`` evaluates them from most to least severe and the
first match wins.
"""

from __future__ import annotations

from enum import Enum


class BPCategory(Enum):
    """Clinical blood pressure category."""

    NORMAL = ("Normal", "Blood pressure in normal range", "low")
    ELEVATED = ("Elevated", "Blood pressure is slightly high", "moderate")
    STAGE_1 = ("Hypertension Stage 1", "Blood pressure is high", "high")
    STAGE_2 = ("Hypertension Stage 2", "Blood pressure is very high", "very high")
    CRISIS = ("Hypertensive Crisis", "Seek emergency medical attention", "severe")

    def __init__(self, label: str, description: str, risk: str):
        self.label = label
        self.description = description
        self.risk = risk

    def __str__(self) -> str:
        return self.label


RECOMMENDATIONS: dict[BPCategory, str] = {
    BPCategory.NORMAL: "Maintain a healthy lifestyle with regular exercise and balanced diet.",
    BPCategory.ELEVATED: (
        "Consider lifestyle changes including reduced sodium intake and regular exercise. "
        "Monitor BP regularly."
    ),
    BPCategory.STAGE_1: (
        "Consult your healthcare provider. Lifestyle changes and possibly medication may be needed."
    ),
    BPCategory.STAGE_2: (
        "Consult your healthcare provider promptly. "
        "Medication is likely needed along with lifestyle changes."
    ),
    BPCategory.CRISIS: "SEEK EMERGENCY MEDICAL ATTENTION IMMEDIATELY!",
}


def classify(systolic: int, diastolic: int) -> BPCategory:
    """Determine the blood pressure category for a systolic/diastolic pair.

    Args:
        systolic: Systolic pressure in mmHg
        diastolic: Diastolic pressure in mmHg

    Returns:
        Matching BPCategory
    """
    if systolic > 180 or diastolic > 120:
        return BPCategory.CRISIS
    if systolic >= 140 or diastolic >= 90:
        return BPCategory.STAGE_2
    if systolic >= 130 or diastolic >= 80:
        return BPCategory.STAGE_1
    if systolic >= 120 and diastolic < 80:
        return BPCategory.ELEVATED
    return BPCategory.NORMAL


def category_from_label(label: str) -> BPCategory | None:
    """Look up a category by its stored label."""
    for category in BPCategory:
        if category.label == label:
            return category
    return None


def recommend(category: BPCategory | str) -> str:
    """Get the health recommendation for a category.

    Args:
        category: BPCategory or its label

    Returns:
        Recommendation text; unknown labels get a generic fallback
    """
    if isinstance(category, str):
        resolved = category_from_label(category)
        if resolved is None:
            return f"Unknown category: {category}. Please consult your healthcare provider."
        category = resolved

    recommendation = RECOMMENDATIONS.get(category)
    if recommendation is None:
        return f"Unknown category: {category.label}. Please consult your healthcare provider."
    return recommendation
