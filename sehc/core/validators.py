"""Pure validation helpers shared by the handlers."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

FISCAL_FIELDS = ("socialReason", "zipcode", "fiscalRegimen", "email")
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    """Return the required keys that are absent or None.

    Presence is explicit: ``0``, ``False`` and ``""`` all count as given.
    """
    return [field for field in required if payload.get(field) is None]


def required_message(fields: Iterable[str]) -> str:
    names = list(fields)
    if len(names) == 1:
        return f"{names[0]} is a required field"
    return f"{', '.join(names[:-1])} and {names[-1]} are required fields"


def apply_invoice_rules(invoice: bool, fiscal: Mapping[str, Optional[str]]) -> Dict[str, Optional[str]]:
    """Fiscal data is only kept for clients that request an invoice."""
    if not invoice:
        return {field: None for field in FISCAL_FIELDS}
    return {field: fiscal.get(field) for field in FISCAL_FIELDS}


def merge_patch(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the keys that carry a value; omitted keys keep what is stored."""
    return {key: value for key, value in changes.items() if value is not None}


def aggregate_lines(lines: Iterable[Tuple[int, int]]) -> Dict[int, int]:
    """Sum requested quantities per inventory item, first-seen order."""
    totals: Dict[int, int] = {}
    for item_id, quantity in lines:
        totals[item_id] = totals.get(item_id, 0) + quantity
    return totals


def round_money(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round an amount to cents, half up."""
    if value is None:
        return None
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
