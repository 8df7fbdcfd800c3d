# family_balance/question_bank.py
"""
Built-in question bank (20 questions per category, ids q1..q80) and
validation for externally supplied banks.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .model import CATEGORY_ORDER, Category, Question, record_id

# text, base_weight, frequency, invisibility, emotional_labor, research_impact, child_development
_Row = Tuple[str, int, str, str, str, str, str]

_BANK: Dict[Category, List[_Row]] = {
    Category.VISIBLE_HOUSEHOLD: [
        ("Who is responsible for cleaning floors in your home?", 2, "SeveralWeekly", "HighlyVisible", "Minimal", "MediumImpact", "ModerateImpact"),
        ("Who usually washes the dishes after meals?", 2, "Daily", "HighlyVisible", "Minimal", "MediumImpact", "ModerateImpact"),
        ("Who typically cooks meals for the family?", 4, "Daily", "HighlyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who does the laundry in your household?", 3, "SeveralWeekly", "PartiallyVisible", "Minimal", "MediumImpact", "ModerateImpact"),
        ("Who does the grocery shopping?", 3, "Weekly", "HighlyVisible", "Low", "MediumImpact", "ModerateImpact"),
        ("Who takes out the trash regularly?", 1, "SeveralWeekly", "PartiallyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who handles yard work like mowing and gardening?", 3, "Weekly", "HighlyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who cleans the bathrooms?", 3, "Weekly", "PartiallyVisible", "Low", "MediumImpact", "LimitedImpact"),
        ("Who dusts surfaces around the house?", 2, "Weekly", "PartiallyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who makes the beds each day?", 1, "Daily", "HighlyVisible", "Minimal", "StandardImpact", "ModerateImpact"),
        ("Who irons clothes when needed?", 2, "Weekly", "HighlyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who changes bed linens regularly?", 2, "Weekly", "PartiallyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who feeds the pets?", 1, "Daily", "PartiallyVisible", "Low", "StandardImpact", "ModerateImpact"),
        ("Who walks the dog?", 2, "Daily", "HighlyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who handles small home repairs?", 3, "Monthly", "HighlyVisible", "Low", "StandardImpact", "LimitedImpact"),
        ("Who washes the windows?", 2, "Quarterly", "HighlyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who sets the table for meals?", 1, "Daily", "HighlyVisible", "Minimal", "StandardImpact", "ModerateImpact"),
        ("Who shovels snow in winter?", 3, "Quarterly", "HighlyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who cleans the refrigerator?", 2, "Monthly", "PartiallyVisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who organizes closets and storage spaces?", 3, "Quarterly", "PartiallyVisible", "Low", "StandardImpact", "LimitedImpact"),
    ],
    Category.INVISIBLE_HOUSEHOLD: [
        ("Who plans meals for the week?", 3, "Weekly", "MostlyInvisible", "Moderate", "HighImpact", "ModerateImpact"),
        ("Who schedules family appointments?", 3, "Weekly", "MostlyInvisible", "Moderate", "HighImpact", "ModerateImpact"),
        ("Who manages the family calendar?", 4, "Daily", "CompletelyInvisible", "High", "HighImpact", "ModerateImpact"),
        ("Who remembers birthdays and special occasions?", 2, "Monthly", "CompletelyInvisible", "Moderate", "MediumImpact", "LimitedImpact"),
        ("Who makes shopping lists?", 2, "Weekly", "MostlyInvisible", "Low", "MediumImpact", "LimitedImpact"),
        ("Who handles paying bills on time?", 3, "Monthly", "MostlyInvisible", "Moderate", "HighImpact", "LimitedImpact"),
        ("Who coordinates childcare arrangements?", 4, "Weekly", "MostlyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who plans family vacations and trips?", 4, "Quarterly", "PartiallyVisible", "Moderate", "MediumImpact", "ModerateImpact"),
        ("Who oversees children's educational needs?", 4, "Weekly", "MostlyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who keeps track of household supplies?", 2, "Weekly", "CompletelyInvisible", "Low", "MediumImpact", "LimitedImpact"),
        ("Who provides emotional support during tough times?", 4, "Weekly", "CompletelyInvisible", "Extreme", "HighImpact", "HighImpact"),
        ("Who maintains social relationships and family connections?", 3, "Weekly", "MostlyInvisible", "High", "MediumImpact", "ModerateImpact"),
        ("Who anticipates family needs like seasonal clothing?", 3, "Quarterly", "CompletelyInvisible", "Moderate", "MediumImpact", "ModerateImpact"),
        ("Who decides on home organization systems?", 2, "Quarterly", "MostlyInvisible", "Low", "StandardImpact", "LimitedImpact"),
        ("Who researches products before purchasing?", 2, "Monthly", "CompletelyInvisible", "Low", "StandardImpact", "LimitedImpact"),
        ("Who maintains important documents?", 2, "Quarterly", "CompletelyInvisible", "Low", "MediumImpact", "LimitedImpact"),
        ("Who plans for holidays and special events?", 4, "Quarterly", "MostlyInvisible", "High", "MediumImpact", "ModerateImpact"),
        ("Who tracks maintenance schedules for appliances?", 2, "Quarterly", "CompletelyInvisible", "Minimal", "StandardImpact", "LimitedImpact"),
        ("Who manages family health needs?", 4, "Weekly", "MostlyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who guides family values and addresses behavioral issues?", 4, "Weekly", "MostlyInvisible", "Extreme", "HighImpact", "HighImpact"),
    ],
    Category.VISIBLE_PARENTAL: [
        ("Who drives kids to school and activities?", 3, "Daily", "HighlyVisible", "Low", "MediumImpact", "HighImpact"),
        ("Who helps with homework?", 3, "Daily", "HighlyVisible", "Moderate", "HighImpact", "HighImpact"),
        ("Who attends parent-teacher conferences?", 2, "Quarterly", "HighlyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who prepares school lunches?", 2, "Daily", "HighlyVisible", "Low", "MediumImpact", "ModerateImpact"),
        ("Who coordinates extracurricular activities?", 3, "Weekly", "PartiallyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who attends children's performances and games?", 2, "Monthly", "HighlyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who organizes playdates?", 2, "Weekly", "PartiallyVisible", "Low", "StandardImpact", "ModerateImpact"),
        ("Who supervises bath time?", 2, "Daily", "HighlyVisible", "Low", "MediumImpact", "HighImpact"),
        ("Who manages bedtime routines?", 3, "Daily", "HighlyVisible", "Moderate", "HighImpact", "HighImpact"),
        ("Who shops for school supplies and clothing?", 2, "Quarterly", "HighlyVisible", "Low", "StandardImpact", "ModerateImpact"),
        ("Who schedules children's medical appointments?", 2, "Quarterly", "PartiallyVisible", "Moderate", "HighImpact", "ModerateImpact"),
        ("Who prepares children for school each morning?", 3, "Daily", "HighlyVisible", "Moderate", "HighImpact", "HighImpact"),
        ("Who volunteers at school functions?", 2, "Quarterly", "HighlyVisible", "Low", "StandardImpact", "ModerateImpact"),
        ("Who communicates with teachers and school staff?", 2, "Weekly", "PartiallyVisible", "Moderate", "MediumImpact", "ModerateImpact"),
        ("Who plans and hosts birthday parties?", 4, "Quarterly", "HighlyVisible", "High", "StandardImpact", "ModerateImpact"),
        ("Who monitors screen time?", 2, "Daily", "PartiallyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who teaches life skills?", 3, "Weekly", "PartiallyVisible", "Moderate", "HighImpact", "HighImpact"),
        ("Who disciplines and sets behavioral expectations?", 3, "Daily", "HighlyVisible", "High", "HighImpact", "HighImpact"),
        ("Who assists with college or career preparation?", 3, "Monthly", "PartiallyVisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who engages in recreational activities with kids?", 3, "SeveralWeekly", "HighlyVisible", "Low", "MediumImpact", "HighImpact"),
    ],
    Category.INVISIBLE_PARENTAL: [
        ("Who coordinates children's schedules to prevent conflicts?", 3, "Weekly", "CompletelyInvisible", "Moderate", "HighImpact", "ModerateImpact"),
        ("Who provides emotional labor for the family?", 4, "Daily", "CompletelyInvisible", "Extreme", "HighImpact", "HighImpact"),
        ("Who anticipates developmental needs?", 3, "Monthly", "CompletelyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who networks with other parents?", 2, "Monthly", "MostlyInvisible", "Moderate", "StandardImpact", "LimitedImpact"),
        ("Who monitors academic progress?", 3, "Weekly", "MostlyInvisible", "Moderate", "HighImpact", "HighImpact"),
        ("Who develops strategies for behavioral issues?", 4, "Monthly", "CompletelyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who watches for signs of illness or stress?", 3, "Daily", "CompletelyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who plans for future educational expenses?", 3, "Quarterly", "CompletelyInvisible", "Moderate", "MediumImpact", "ModerateImpact"),
        ("Who maintains family traditions?", 3, "Monthly", "MostlyInvisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who handles cultural and moral education?", 3, "Weekly", "MostlyInvisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who mediates conflicts between siblings?", 3, "SeveralWeekly", "PartiallyVisible", "High", "HighImpact", "HighImpact"),
        ("Who customizes parenting approaches for each child?", 4, "Weekly", "CompletelyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who coordinates with teachers and coaches?", 2, "Weekly", "MostlyInvisible", "Low", "MediumImpact", "ModerateImpact"),
        ("Who stays informed on child safety best practices?", 2, "Monthly", "CompletelyInvisible", "Moderate", "MediumImpact", "ModerateImpact"),
        ("Who keeps track of details like clothing sizes and allergies?", 2, "Monthly", "CompletelyInvisible", "Low", "MediumImpact", "ModerateImpact"),
        ("Who manages their own emotions to provide stability?", 4, "Daily", "CompletelyInvisible", "Extreme", "HighImpact", "HighImpact"),
        ("Who encourages children's personal interests?", 2, "Weekly", "MostlyInvisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who decides on appropriate screen time rules?", 2, "Monthly", "MostlyInvisible", "Moderate", "MediumImpact", "HighImpact"),
        ("Who helps children navigate social relationships?", 3, "Weekly", "MostlyInvisible", "High", "HighImpact", "HighImpact"),
        ("Who supports the co-parent emotionally and practically?", 3, "SeveralWeekly", "CompletelyInvisible", "High", "MediumImpact", "LimitedImpact"),
    ],
}


def default_question_records() -> List[Dict[str, Any]]:
    """Built-in bank as plain records, ids q1..q80 in category order."""
    records: List[Dict[str, Any]] = []
    n = 0
    for category in CATEGORY_ORDER:
        for text, base, freq, invis, emo, research, child in _BANK[category]:
            n += 1
            records.append(
                dict(
                    id=f"q{n}",
                    text=text,
                    category=category.value,
                    base_weight=base,
                    frequency=freq,
                    invisibility=invis,
                    emotional_labor=emo,
                    research_impact=research,
                    child_development=child,
                )
            )
    return records


def validate_bank(data: object) -> None:
    """Raise ValueError unless `data` is a list of records with unique ids."""
    if not isinstance(data, list):
        raise ValueError("Question bank must be a list")

    seen = set()
    for q in data:
        qid = record_id(q) if isinstance(q, Mapping) else None
        if qid is None:
            raise ValueError("Each question must have an id")
        if qid in seen:
            raise ValueError(f"Duplicate question id: {qid}")
        seen.add(qid)


def load_question_bank(records: Sequence[Mapping[str, Any]]) -> List[Question]:
    """Validate raw records and build Question objects."""
    validate_bank(list(records))
    return [Question.from_record(r) for r in records]


def default_question_bank() -> List[Question]:
    return load_question_bank(default_question_records())
