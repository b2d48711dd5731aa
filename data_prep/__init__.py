"""
Data preparation — input records, promotion drafts, validation, pay matrix loading.
"""

from .loader import load_pay_matrix, table_from_frame
from .profile import (
    CareerProfile,
    PromotionDraft,
    PromotionEvent,
    build_profile,
    complete_promotions,
)
from .validators import ValidationResult, table_in_force, validate_inputs

__all__ = [
    "load_pay_matrix",
    "table_from_frame",
    "CareerProfile",
    "PromotionDraft",
    "PromotionEvent",
    "build_profile",
    "complete_promotions",
    "ValidationResult",
    "table_in_force",
    "validate_inputs",
]
