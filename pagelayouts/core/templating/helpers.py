# pagelayouts/core/templating/helpers.py
"""
Builtin Handlebars helper functions available to every layout.

pybars calls each helper with the current `this` scope first, followed by
the arguments written in the template.
"""
import datetime
from typing import Any, Optional

def _as_number(value: Any) -> Optional[float]:
    # front matter numbers arrive as int/float, hand-written ones as strings.
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

def add_helper(_this: Any, *values: Any) -> float:
    """
    {{add Page.weight 10}}: sums its arguments, skipping anything that is
    not a number, so a missing metadata key counts as nothing.
    """
    return sum((n for n in map(_as_number, values) if n is not None), 0.0)

def now_helper(_this: Any, fmt: Optional[str] = None) -> str:
    # build time in UTC; ISO 8601 unless a strftime format is given.
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.strftime(fmt) if isinstance(fmt, str) else now.isoformat()

def upper_helper(_this: Any, value: Any = "") -> str:
    return str(value if value is not None else "").upper()

def lower_helper(_this: Any, value: Any = "") -> str:
    return str(value if value is not None else "").lower()

def default_helper(_this: Any, value: Any = None, fallback: Any = "") -> Any:
    # {{default Page.title "Untitled"}}
    return fallback if value in (None, "") else value

def date_helper(_this: Any, value: Any = None, fmt: str = "%Y-%m-%d") -> str:
    """
    Formats a date or datetime (as produced by YAML front matter) with strftime.
    Strings are passed through untouched.
    """
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.strftime(fmt)
    return "" if value is None else str(value)

# Dictionary of helpers merged into every site's function set
BUILTIN_HELPERS = {
    "add": add_helper,
    "now": now_helper,
    "upper": upper_helper,
    "lower": lower_helper,
    "default": default_helper,
    "date": date_helper,
}
