"""
Input records for a simulation — career profile and promotions.

Form values arrive as loosely typed mappings (blank strings for unfilled
fields, short month names, ...). They are parsed here into frozen pydantic
models; the engine never sees a half-filled record.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.schema import INCREMENT_MONTHS

logger = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _format_errors(exc: PydanticValidationError) -> List[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in exc.errors()
    ]


class CareerProfile(BaseModel):
    """Employee's position at the simulation start and the retirement date."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: int = Field(
        ..., ge=1, validation_alias=AliasChoices("level", "pay_level"),
        description="Pay level at start",
    )
    basic_pay: int = Field(
        ..., gt=0, validation_alias=AliasChoices("basic_pay", "current_basic"),
        description="Basic pay at start (a step of `level`)",
    )
    allowance_percent: float = Field(
        0.0, ge=0.0, validation_alias=AliasChoices("allowance_percent", "current_da"),
        description="Allowance (DA) at start, in percent of basic",
    )
    increment_month: str = Field(
        "January", description="Month of the annual increment: January or July",
    )
    start_date: date = Field(
        ..., validation_alias=AliasChoices("start_date", "date_of_joining"),
        description="First simulated month",
    )
    retirement_date: date = Field(..., description="Last simulated month")
    existing_corpus: float = Field(
        0.0, ge=0.0, validation_alias=AliasChoices("existing_corpus", "current_nps_corpus"),
        description="Contribution balance already held at start_date",
    )

    @field_validator("allowance_percent", "existing_corpus", mode="before")
    @classmethod
    def _blank_is_zero(cls, v):
        return 0.0 if _blank_to_none(v) is None else v

    @field_validator("increment_month", mode="before")
    @classmethod
    def _normalise_increment_month(cls, v):
        if _blank_to_none(v) is None:
            return "January"
        key = str(v).strip().capitalize()
        if key not in INCREMENT_MONTHS:
            raise ValueError(f"increment month must be January or July, got {v!r}")
        return "January" if INCREMENT_MONTHS[key] == 1 else "July"

    @property
    def increment_month_number(self) -> int:
        return INCREMENT_MONTHS[self.increment_month]


class PromotionEvent(BaseModel):
    """A complete promotion: effective date, target level and target basic."""

    model_config = ConfigDict(frozen=True)

    effective_date: date
    level: int = Field(..., ge=1)
    basic_pay: int = Field(..., gt=0)

    @property
    def year(self) -> int:
        return self.effective_date.year

    @property
    def month(self) -> int:
        return self.effective_date.month


class PromotionDraft(BaseModel):
    """A promotion as entered so far; any field may still be missing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    effective_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("effective_date", "date"),
    )
    level: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("level", "new_level"),
    )
    basic_pay: Optional[int] = Field(
        None, gt=0, validation_alias=AliasChoices("basic_pay", "new_basic"),
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_missing(cls, v):
        return _blank_to_none(v)

    @property
    def is_complete(self) -> bool:
        return None not in (self.effective_date, self.level, self.basic_pay)

    def to_event(self) -> PromotionEvent:
        if not self.is_complete:
            raise ValueError("Cannot build a promotion from an incomplete draft.")
        return PromotionEvent(
            effective_date=self.effective_date,
            level=self.level,
            basic_pay=self.basic_pay,
        )


PromotionInput = Union[PromotionEvent, PromotionDraft, Mapping[str, Any]]


def build_profile(form: Union[CareerProfile, Mapping[str, Any]]) -> CareerProfile:
    """Parse form values into a CareerProfile, reporting every bad field at once."""
    if isinstance(form, CareerProfile):
        return form
    cleaned = {k: v for k, v in dict(form).items() if _blank_to_none(v) is not None}
    try:
        return CareerProfile.model_validate(cleaned)
    except PydanticValidationError as exc:
        errors = _format_errors(exc)
        raise ValidationError(f"Invalid career profile ({len(errors)} problem(s)).", errors) from exc


def complete_promotions(drafts: Iterable[PromotionInput]) -> List[PromotionEvent]:
    """
    Keep only promotions with date, level and basic all present, sorted by effective date.
    Incomplete drafts are dropped silently; malformed values raise ValidationError.
    """
    events: List[PromotionEvent] = []
    errors: List[str] = []
    for i, item in enumerate(drafts):
        if isinstance(item, PromotionEvent):
            events.append(item)
            continue
        if not isinstance(item, PromotionDraft):
            try:
                fields = dict(item)
            except (TypeError, ValueError):
                errors.append(f"promotion[{i}]: not a mapping ({type(item).__name__}).")
                continue
            try:
                item = PromotionDraft.model_validate(fields)
            except PydanticValidationError as exc:
                errors.extend(f"promotion[{i}].{msg}" for msg in _format_errors(exc))
                continue
        if item.is_complete:
            events.append(item.to_event())
        else:
            logger.debug("Skipping incomplete promotion draft %d: %s", i, item)

    if errors:
        raise ValidationError(f"Invalid promotion entries ({len(errors)} problem(s)).", errors)
    return sorted(events, key=lambda p: p.effective_date)
