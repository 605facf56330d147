#!/usr/bin/env python3
"""
Matcher Models - Data structures for profiles, scholarships and embeddings.

Catalog payloads use camelCase keys (``educationLevels``, ``maxIncome``...);
the ``from_dict`` constructors translate them into these dataclasses.
Eligibility dimensions that accept the ``"all"`` wildcard are parsed into
``Universal`` or ``RestrictedTo`` so matching never compares magic strings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from core.exceptions import MalformedInputError

WILDCARD = "all"

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


@dataclass(frozen=True)
class Universal:
    """Dimension open to everyone."""

    is_universal = True

    def allows(self, value: str) -> bool:
        return True


@dataclass(frozen=True)
class RestrictedTo:
    """Dimension limited to an explicit set of values (order kept for rendering)."""
    values: Tuple[str, ...]

    is_universal = False

    def allows(self, value: str) -> bool:
        return value in self.values


Restriction = Union[Universal, RestrictedTo]

UNIVERSAL = Universal()


def parse_restriction(raw: Any) -> Restriction:
    """
    Parse a raw eligibility value into a Restriction.

    Accepts a single string or a list of strings. Any occurrence of the
    wildcard makes the dimension universal. ``None`` is treated as universal.
    """
    if raw is None:
        return UNIVERSAL
    if isinstance(raw, str):
        raw = [raw]
    values = tuple(str(v) for v in raw)
    if WILDCARD in values:
        return UNIVERSAL
    return RestrictedTo(values)


def restriction_to_raw(restriction: Restriction) -> List[str]:
    if restriction.is_universal:
        return [WILDCARD]
    return list(restriction.values)


def parse_income(value: Optional[str]) -> Optional[int]:
    """Parse a profile income string into an integer amount.

    Raises:
        MalformedInputError: if the value is present but not an integer
    """
    if value is None or value == "":
        return None
    text = str(value).strip()
    # Digits only: no sign, separators, decimals or exponents
    if not (text.isascii() and text.isdigit()):
        raise MalformedInputError(f"Income must be a whole number, got {value!r}")
    return int(text)


@dataclass(frozen=True)
class StudentProfile:
    """Requesting student's attributes. ``None`` means the dimension is not scored."""
    state: Optional[str] = None
    category: Optional[str] = None
    income: Optional[str] = None
    education_level: Optional[str] = None
    gender: Optional[str] = None
    disability: Optional[bool] = None
    religion: Optional[str] = None
    area: Optional[str] = None
    course: Optional[str] = None

    @property
    def income_amount(self) -> Optional[int]:
        return parse_income(self.income)

    def validate(self) -> None:
        """Fail fast on malformed fields."""
        parse_income(self.income)

    def is_empty(self) -> bool:
        return all(
            getattr(self, name) in (None, "")
            for name in self.__dataclass_fields__
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentProfile":
        income = data.get('income')
        disability = data.get('disability')
        if isinstance(disability, str):
            disability = disability.strip().lower() == 'true'
        return cls(
            state=data.get('state') or None,
            category=data.get('category') or None,
            income=str(income) if income not in (None, "") else None,
            education_level=data.get('educationLevel') or None,
            gender=data.get('gender') or None,
            disability=bool(disability) if disability is not None else None,
            religion=data.get('religion') or None,
            area=data.get('area') or None,
            course=data.get('course') or None,
        )


@dataclass(frozen=True)
class Eligibility:
    """Eligibility criteria attached to a scholarship."""
    states: Restriction = UNIVERSAL
    categories: Restriction = UNIVERSAL
    max_income: Optional[int] = None  # None = no income limit
    education_levels: Restriction = RestrictedTo(())
    gender: Restriction = UNIVERSAL
    disability: bool = False  # True = disability required
    religion: Restriction = UNIVERSAL
    area: Restriction = UNIVERSAL
    courses: Restriction = UNIVERSAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Eligibility":
        max_income = data.get('maxIncome')
        return cls(
            states=parse_restriction(data.get('states')),
            categories=parse_restriction(data.get('categories')),
            max_income=int(max_income) if max_income is not None else None,
            education_levels=parse_restriction(data.get('educationLevels') or []),
            gender=parse_restriction(data.get('gender')),
            disability=bool(data.get('disability', False)),
            religion=parse_restriction(data.get('religion')),
            area=parse_restriction(data.get('area')),
            courses=parse_restriction(data.get('courses')),
        )

    def to_dict(self) -> Dict[str, Any]:
        gender = restriction_to_raw(self.gender)
        area = restriction_to_raw(self.area)
        return {
            'states': restriction_to_raw(self.states),
            'categories': restriction_to_raw(self.categories),
            'maxIncome': self.max_income,
            'educationLevels': restriction_to_raw(self.education_levels),
            'gender': gender[0] if len(gender) == 1 else gender,
            'disability': self.disability,
            'religion': restriction_to_raw(self.religion),
            'area': area[0] if len(area) == 1 else area,
            'courses': restriction_to_raw(self.courses),
        }


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


@dataclass(frozen=True)
class Scholarship:
    """A scholarship offer from the catalog."""
    id: str
    name: str
    description: str = ""
    eligibility: Eligibility = field(default_factory=Eligibility)
    benefits: str = ""
    deadline: str = ""
    application_steps: Tuple[str, ...] = ()
    required_documents: Tuple[str, ...] = ()
    official_url: str = ""
    status: str = STATUS_APPROVED
    type: str = "public"  # public|private
    owner_id: Optional[str] = None  # donor id for private scholarships
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == STATUS_APPROVED

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_status: str = STATUS_APPROVED) -> "Scholarship":
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            description=data.get('description', '') or '',
            eligibility=Eligibility.from_dict(data.get('eligibility') or {}),
            benefits=data.get('benefits', '') or '',
            deadline=data.get('deadline', '') or '',
            application_steps=tuple(data.get('applicationSteps') or ()),
            required_documents=tuple(data.get('requiredDocuments') or ()),
            official_url=data.get('officialUrl', '') or '',
            status=data.get('status') or default_status,
            type=data.get('type') or 'public',
            owner_id=data.get('createdBy') or data.get('ownerId'),
            created_at=_parse_timestamp(data.get('createdAt')),
            updated_at=_parse_timestamp(data.get('updatedAt')),
        )

    def to_summary(self) -> Dict[str, Any]:
        """Public fields returned alongside scores."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'benefits': self.benefits,
            'deadline': self.deadline,
            'applicationSteps': list(self.application_steps),
            'requiredDocuments': list(self.required_documents),
            'officialUrl': self.official_url,
        }


@dataclass
class EmbeddingRecord:
    """Stored embedding for one scholarship. One record per scholarship id."""
    id: str
    embedding: List[float]
    model: Optional[str] = None
    version: Optional[str] = None
    generated_at: Optional[datetime] = None
    text_hash: Optional[str] = None  # Absent on legacy records

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'embedding': list(self.embedding),
            'model': self.model,
            'version': self.version,
            'generatedAt': self.generated_at.isoformat() if self.generated_at else None,
            'textHash': self.text_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmbeddingRecord":
        return cls(
            id=str(data['id']),
            embedding=[float(x) for x in data['embedding']],
            model=data.get('model'),
            version=data.get('version'),
            generated_at=_parse_timestamp(data.get('generatedAt')),
            text_hash=data.get('textHash'),
        )
