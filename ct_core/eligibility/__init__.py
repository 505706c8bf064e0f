"""Content-type and field gating for automatic translation."""

from ct_core.eligibility.fields import FieldDefinition, FieldKind, SyncMode, is_textual
from ct_core.eligibility.policy import EligibilityPolicy, ignore_token
from ct_core.eligibility.settings_base import EligibilitySettings

__all__ = [
    "EligibilityPolicy",
    "EligibilitySettings",
    "FieldDefinition",
    "FieldKind",
    "SyncMode",
    "ignore_token",
    "is_textual",
]
