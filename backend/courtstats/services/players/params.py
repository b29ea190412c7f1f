from typing import Any, Dict, Optional, Tuple

from bson import ObjectId

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25

# Derived or ownership fields the update route never writes
PROTECTED_FIELDS = ('overall_stats', 'all_time_shot_data', 'created_by')


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)


def normalize_object_id(value: Any) -> Optional[str]:
    """Return the canonical (lowercase hex) form of a record id, or None if malformed."""
    if not is_valid_object_id(value):
        return None
    return str(ObjectId(value))


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def parse_paging(page_raw: Optional[str], limit_raw: Optional[str]) -> Tuple[int, int, int]:
    """Return (page, limit, skip); absent, non-numeric or non-positive values use defaults."""
    page = _positive_int(page_raw, DEFAULT_PAGE)
    limit = _positive_int(limit_raw, DEFAULT_LIMIT)
    return page, limit, (page - 1) * limit


def strip_protected_fields(updates: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
