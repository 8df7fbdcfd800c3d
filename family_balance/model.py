# family_balance/model.py
"""
Shared data model: the closed category set, weight-attribute enums, questions,
priorities, periods and balance records.

Every other module takes its categories and labels from here.
"""
from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union

from .config import LOGGER


# -----------------------------
# Enumerations
# -----------------------------
class Category(str, Enum):
    """The four fixed task-classification buckets."""
    VISIBLE_HOUSEHOLD = "VisibleHousehold"
    INVISIBLE_HOUSEHOLD = "InvisibleHousehold"
    VISIBLE_PARENTAL = "VisibleParental"
    INVISIBLE_PARENTAL = "InvisibleParental"


CATEGORY_ORDER: Tuple[Category, ...] = (
    Category.VISIBLE_HOUSEHOLD,
    Category.INVISIBLE_HOUSEHOLD,
    Category.VISIBLE_PARENTAL,
    Category.INVISIBLE_PARENTAL,
)

CATEGORY_LABELS: Dict[Category, str] = {
    Category.VISIBLE_HOUSEHOLD: "Visible Household Tasks",
    Category.INVISIBLE_HOUSEHOLD: "Invisible Household Tasks",
    Category.VISIBLE_PARENTAL: "Visible Parental Tasks",
    Category.INVISIBLE_PARENTAL: "Invisible Parental Tasks",
}


class Frequency(str, Enum):
    DAILY = "Daily"
    SEVERAL_WEEKLY = "SeveralWeekly"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"


class Invisibility(str, Enum):
    HIGHLY_VISIBLE = "HighlyVisible"
    PARTIALLY_VISIBLE = "PartiallyVisible"
    MOSTLY_INVISIBLE = "MostlyInvisible"
    COMPLETELY_INVISIBLE = "CompletelyInvisible"


class EmotionalLabor(str, Enum):
    MINIMAL = "Minimal"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    EXTREME = "Extreme"


class ResearchImpact(str, Enum):
    HIGH_IMPACT = "HighImpact"
    MEDIUM_IMPACT = "MediumImpact"
    STANDARD_IMPACT = "StandardImpact"


class ChildDevelopment(str, Enum):
    HIGH_IMPACT = "HighImpact"
    MODERATE_IMPACT = "ModerateImpact"
    LIMITED_IMPACT = "LimitedImpact"


class Assignee(str, Enum):
    """The two tracked parties."""
    A = "A"
    B = "B"


E = TypeVar("E", bound=Enum)


def _norm_key(x: object) -> str:
    """Lower-case and strip separators so "SEVERAL_WEEKLY" == "several weekly" == "SeveralWeekly"."""
    return re.sub(r"[\s_\-]+", "", str(x)).lower()


def coerce_enum(enum_cls: Type[E], value: object, default: Optional[E] = None) -> Optional[E]:
    """
    Resolve `value` to a member of `enum_cls`.

    Accepts members, values and member names in any case/separator style.
    Unknown or missing values return `default`.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    if isinstance(value, Enum):
        value = value.value
    key = _norm_key(value)
    if not key:
        return default
    for member in enum_cls:
        if key in (_norm_key(member.value), _norm_key(member.name)):
            return member
    return default


def coerce_category(value: object) -> Optional[Category]:
    """Like coerce_enum, but also understands the long labels ("Visible Household Tasks")."""
    found = coerce_enum(Category, value)
    if found is not None or value is None:
        return found
    key = _norm_key(value)
    for cat, label in CATEGORY_LABELS.items():
        if key == _norm_key(label):
            return cat
    return None


# -----------------------------
# Entities
# -----------------------------
DEFAULT_BASE_WEIGHT = 3  # "moderate" tier: 30-60 minutes or steady background load
MIN_BASE_WEIGHT = 1
MAX_BASE_WEIGHT = 5


def coerce_base_weight(value: object) -> int:
    """Resolve a base weight to the 1-5 tier range; missing, zero or non-numeric -> DEFAULT_BASE_WEIGHT."""
    if value is None or isinstance(value, bool):
        return DEFAULT_BASE_WEIGHT
    try:
        w = float(value)
    except (TypeError, ValueError):
        return DEFAULT_BASE_WEIGHT
    if w != w or w == 0 or math.isinf(w):
        return DEFAULT_BASE_WEIGHT
    return int(min(MAX_BASE_WEIGHT, max(MIN_BASE_WEIGHT, round(w))))


def record_id(rec: Mapping[str, Any]) -> Optional[str]:
    """Stripped question id of a raw record (`id`, else `question_id`); None when missing or blank."""
    for key in ("id", "question_id"):
        if rec.get(key) is not None:
            qid = str(rec[key]).strip()
            return qid or None
    return None


@dataclass(frozen=True)
class Question:
    """A survey question with its six weight attributes. Immutable."""
    id: str
    text: str
    category: Category
    base_weight: int = DEFAULT_BASE_WEIGHT
    frequency: Frequency = Frequency.WEEKLY
    invisibility: Invisibility = Invisibility.PARTIALLY_VISIBLE
    emotional_labor: EmotionalLabor = EmotionalLabor.MINIMAL
    research_impact: ResearchImpact = ResearchImpact.STANDARD_IMPACT
    child_development: ChildDevelopment = ChildDevelopment.LIMITED_IMPACT

    @staticmethod
    def from_record(rec: Mapping[str, Any]) -> "Question":
        """
        Build a Question from a loosely-typed record (question bank JSON row,
        workbook row). Accepts camelCase and snake_case keys.

        Unknown attribute values fall back to their defaults; an unknown
        category raises ValueError.
        """
        def get(*keys: str) -> Any:
            for k in keys:
                if k in rec and rec[k] is not None:
                    return rec[k]
            return None

        qid = record_id(rec)
        if qid is None:
            raise ValueError("Question record has no id")

        raw_cat = get("category")
        category = coerce_category(raw_cat)
        if category is None:
            raise ValueError(f"Question {qid!r} has unknown category: {raw_cat!r}")

        return Question(
            id=qid,
            text=str(get("text") or ""),
            category=category,
            base_weight=coerce_base_weight(get("baseWeight", "base_weight")),
            frequency=coerce_enum(Frequency, get("frequency"), Frequency.WEEKLY),
            invisibility=coerce_enum(Invisibility, get("invisibility"), Invisibility.PARTIALLY_VISIBLE),
            emotional_labor=coerce_enum(EmotionalLabor, get("emotionalLabor", "emotional_labor"), EmotionalLabor.MINIMAL),
            research_impact=coerce_enum(ResearchImpact, get("researchImpact", "research_impact"), ResearchImpact.STANDARD_IMPACT),
            child_development=coerce_enum(ChildDevelopment, get("childDevelopment", "child_development"), ChildDevelopment.LIMITED_IMPACT),
        )

    def to_record(self) -> Dict[str, Any]:
        return dict(
            id=self.id,
            text=self.text,
            category=self.category.value,
            base_weight=self.base_weight,
            frequency=self.frequency.value,
            invisibility=self.invisibility.value,
            emotional_labor=self.emotional_labor.value,
            research_impact=self.research_impact.value,
            child_development=self.child_development.value,
        )


@dataclass(frozen=True)
class FamilyPriorities:
    """A family's ranked emphasis over (at most three) categories."""
    highest_priority: Optional[Category] = None
    secondary_priority: Optional[Category] = None
    tertiary_priority: Optional[Category] = None

    def priority_rank(self, category: object) -> Optional[int]:
        """
        Return 1/2/3 for highest/secondary/tertiary, None if unmatched.

        Duplicate fields are tolerated: the first matching field wins.
        """
        cat = coerce_category(category)
        if cat is None:
            return None
        for rank, p in enumerate((self.highest_priority, self.secondary_priority, self.tertiary_priority), start=1):
            if p is not None and p == cat:
                return rank
        return None

    @staticmethod
    def from_record(rec: Optional[Mapping[str, Any]]) -> "FamilyPriorities":
        if not rec:
            return NEUTRAL_PRIORITIES
        return FamilyPriorities(
            highest_priority=coerce_category(rec.get("highestPriority", rec.get("highest_priority"))),
            secondary_priority=coerce_category(rec.get("secondaryPriority", rec.get("secondary_priority"))),
            tertiary_priority=coerce_category(rec.get("tertiaryPriority", rec.get("tertiary_priority"))),
        )


NEUTRAL_PRIORITIES = FamilyPriorities()


# -----------------------------
# Periods
# -----------------------------
INITIAL = "Initial"
Period = Union[str, int]


def normalize_period(period: object) -> Period:
    """
    Return INITIAL or a positive int week number.

    Accepts "initial" in any case, positive ints, integral floats and digit
    strings. Anything else is a caller error.
    """
    if isinstance(period, bool):
        raise ValueError(f"Invalid period: {period!r}")
    if isinstance(period, str):
        s = period.strip()
        if s.lower() == INITIAL.lower():
            return INITIAL
        if s.isdigit() and int(s) > 0:
            return int(s)
        raise ValueError(f"Invalid period: {period!r}")
    if isinstance(period, numbers.Integral):
        if period > 0:
            return int(period)
        raise ValueError(f"Week number must be positive: {period!r}")
    if isinstance(period, float) and period.is_integer() and period > 0:
        return int(period)
    raise ValueError(f"Invalid period: {period!r}")


def period_index(period: object) -> int:
    """Initial -> 0, week n -> n."""
    p = normalize_period(period)
    return 0 if p == INITIAL else int(p)


def period_sort_key(period: object) -> Tuple[int, int]:
    """Initial sorts before any week."""
    p = normalize_period(period)
    return (0, 0) if p == INITIAL else (1, int(p))


# -----------------------------
# Responses
# -----------------------------
Responses = Mapping[str, Any]


def coerce_assignee(value: object) -> Optional[Assignee]:
    return coerce_enum(Assignee, value)


def coerce_responses(responses: Optional[Responses]) -> Dict[str, Assignee]:
    """Keep answered entries only; None and values other than A/B count as unanswered."""
    out: Dict[str, Assignee] = {}
    for qid, value in (responses or {}).items():
        who = coerce_assignee(value)
        if who is None:
            if value is not None:
                LOGGER.debug("Ignoring response %s with unrecognized assignee %r", qid, value)
            continue
        out[str(qid)] = who
    return out


def merge_responses(*maps: Optional[Responses]) -> Dict[str, Any]:
    """
    Merge response maps submitted for the same period.

    Later maps win per question id (last-write-wins); unanswered (None)
    entries never erase an earlier answer.
    """
    merged: Dict[str, Any] = {}
    for m in maps:
        for qid, value in (m or {}).items():
            if value is None:
                continue
            merged[str(qid)] = value
    return merged


# -----------------------------
# Balance records
# -----------------------------
@dataclass(frozen=True)
class PartyShare:
    """Percentage split of weighted load between A and B."""
    a: float = 50.0
    b: float = 50.0

    def to_record(self) -> Dict[str, float]:
        return {"A": self.a, "B": self.b}


@dataclass(frozen=True)
class CategoryShare(PartyShare):
    imbalance: float = 0.0

    def to_record(self) -> Dict[str, float]:
        return {"A": self.a, "B": self.b, "imbalance": self.imbalance}


def _freeze_categories(record) -> None:
    # read-only view over a private copy; frozen dataclasses need object.__setattr__
    object.__setattr__(record, "categories", MappingProxyType(dict(record.categories)))


@dataclass(frozen=True)
class BalanceResult:
    """Numeric content of one aggregation (no period label yet)."""
    overall: PartyShare = field(default_factory=PartyShare)
    categories: Mapping[Category, CategoryShare] = field(
        default_factory=lambda: {c: CategoryShare() for c in CATEGORY_ORDER}
    )

    def __post_init__(self):
        _freeze_categories(self)


@dataclass(frozen=True)
class BalanceSnapshot:
    """Immutable, period-labeled balance record."""
    period: Period
    overall: PartyShare
    categories: Mapping[Category, CategoryShare]

    def __post_init__(self):
        _freeze_categories(self)

    def to_record(self) -> Dict[str, Any]:
        """Plain-dict form for a key-value document store."""
        return {
            "period": self.period,
            "overallBalance": self.overall.to_record(),
            "categoryBalance": {c.value: self.categories[c].to_record() for c in CATEGORY_ORDER if c in self.categories},
        }

    @staticmethod
    def from_record(rec: Mapping[str, Any]) -> "BalanceSnapshot":
        ob = rec.get("overallBalance") or {}
        cats: Dict[Category, CategoryShare] = {}
        for key, val in (rec.get("categoryBalance") or {}).items():
            cat = coerce_category(key)
            if cat is None:
                raise ValueError(f"Unknown category in snapshot: {key!r}")
            cats[cat] = CategoryShare(
                a=float(val.get("A", 50.0)),
                b=float(val.get("B", 50.0)),
                imbalance=float(val.get("imbalance", 0.0)),
            )
        for cat in CATEGORY_ORDER:
            cats.setdefault(cat, CategoryShare())
        return BalanceSnapshot(
            period=normalize_period(rec.get("period")),
            overall=PartyShare(a=float(ob.get("A", 50.0)), b=float(ob.get("B", 50.0))),
            categories={c: cats[c] for c in CATEGORY_ORDER},
        )
