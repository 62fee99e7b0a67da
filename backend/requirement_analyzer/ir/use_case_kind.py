from enum import IntEnum
from typing import Any


class UseCaseKind(IntEnum):
    FUNCTIONAL = 1
    NON_FUNCTIONAL = 2
    SYSTEM = 3


KIND_LABELS = {
    UseCaseKind.FUNCTIONAL: "Functional",
    UseCaseKind.NON_FUNCTIONAL: "Non-Functional",
    UseCaseKind.SYSTEM: "System",
}

UNKNOWN_LABEL = "Unknown"

# Labels the model sometimes returns instead of the numeric code
_LABEL_ALIASES = {
    "functional": UseCaseKind.FUNCTIONAL,
    "funcional": UseCaseKind.FUNCTIONAL,
    "non-functional": UseCaseKind.NON_FUNCTIONAL,
    "non functional": UseCaseKind.NON_FUNCTIONAL,
    "nonfunctional": UseCaseKind.NON_FUNCTIONAL,
    "no funcional": UseCaseKind.NON_FUNCTIONAL,
    "system": UseCaseKind.SYSTEM,
    "sistema": UseCaseKind.SYSTEM,
}


def kind_label(value: Any) -> str:
    """
    Display label for a stored kind code.
    Unrecognized codes render as "Unknown", never raise.
    """
    try:
        return KIND_LABELS[UseCaseKind(int(value))]
    except (TypeError, ValueError):
        return UNKNOWN_LABEL


def coerce_kind(value: Any) -> Any:
    """
    Converts:
      1, "1", "Functional", "Funcional" → 1
    Anything else is returned untouched so validation can decide.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        alias = _LABEL_ALIASES.get(text.lower())
        return int(alias) if alias is not None else value
    return value
