from typing import List


def csv_to_list(v: str | List[str] | None, *, lower: bool = False) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (list, tuple, set)):
        items = [str(s).strip() for s in v if s and str(s).strip()]
    else:
        items = [s.strip() for s in str(v).split(",") if s.strip()]
    if lower:
        items = [s.lower().lstrip(".") for s in items]
    return items
