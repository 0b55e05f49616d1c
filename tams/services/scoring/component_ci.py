"""Component Condition Index and remedial costing."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from .codes import NOT_PRESENT, UNABLE_TO_INSPECT, code_to_int, normalize_code, to_decimal

CI_MIN = 0
CI_MAX = 100
NO_DEFECT_CI = CI_MAX
DEFAULT_REPAIR_THRESHOLD = 60


def score(degree: Any, extent: Any, relevancy: Any) -> Optional[int]:
    """Return ``100 - D*E*R`` clamped to 0-100, or ``None`` when unscorable.

    A degree of ``X`` or ``0`` means no defect and scores a full 100, even
    though the component is classified as record only. Any ``U`` or other
    non-numeric code leaves the component unscored.
    """

    d = normalize_code(degree)
    e = normalize_code(extent)
    r = normalize_code(relevancy)

    if UNABLE_TO_INSPECT in (d, e, r):
        return None
    if d in (NOT_PRESENT, "0"):
        return NO_DEFECT_CI

    d_num, e_num, r_num = code_to_int(d), code_to_int(e), code_to_int(r)
    if d_num is None or e_num is None or r_num is None:
        return None

    ci = CI_MAX - d_num * e_num * r_num
    return max(CI_MIN, min(CI_MAX, ci))


def needs_repair(ci: Optional[int], repair_threshold: Any = DEFAULT_REPAIR_THRESHOLD) -> bool:
    if ci is None:
        return False
    threshold = to_decimal(repair_threshold)
    if threshold is None:
        threshold = Decimal(DEFAULT_REPAIR_THRESHOLD)
    return Decimal(ci) <= threshold


def remedial_cost(
    ci: Optional[int],
    quantity: Any,
    rate: Any,
    repair_threshold: Any = DEFAULT_REPAIR_THRESHOLD,
) -> Optional[Decimal]:
    """Quantity x rate for components at or below the repair threshold."""

    if not needs_repair(ci, repair_threshold):
        return None
    return (to_decimal(quantity) or Decimal("0")) * (to_decimal(rate) or Decimal("0"))
