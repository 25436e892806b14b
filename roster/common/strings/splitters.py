# roster/common/strings/splitters.py
from typing import List


def csv_to_list(v: str | List[str] | None) -> List[str]:
    """Accept "a, b,c" or ["a", "b"] from env/.env and return a clean list."""
    if v is None:
        return []
    if isinstance(v, (list, tuple, set)):
        return [str(s).strip() for s in v if s is not None and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]
