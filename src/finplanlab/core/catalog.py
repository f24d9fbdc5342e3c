"""
Event catalog: the policy table mapping event types to groups and sign polarity.

The projection engine only consumes already-signed amounts. This table is for
callers that build events from unsigned user input (forms, files, the CLI).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ConfigError

__all__ = [
    "EventGroup",
    "DefaultSign",
    "EventField",
    "EventMeta",
    "EVENT_CATALOG",
    "EVENT_GROUPS",
    "get_event_meta",
    "get_event_group",
    "list_event_types_by_group",
    "apply_default_sign",
]


class EventGroup(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    HOUSING = "housing"
    INVESTMENT = "investment"
    INSURANCE = "insurance"
    DEBT = "debt"


class DefaultSign(str, Enum):
    INFLOW = "inflow"
    OUTFLOW = "outflow"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class EventField:
    """Editable field of an event type and the input widget it uses."""

    key: str
    input: str


@dataclass(frozen=True, slots=True)
class EventMeta:
    label: str
    group: EventGroup
    default_sign: DefaultSign
    fields: tuple[EventField, ...]


_BASE_FIELDS = (
    EventField("name", "text"),
    EventField("start_month", "month"),
    EventField("end_month", "month"),
    EventField("monthly_amount", "number"),
    EventField("one_time_amount", "number"),
    EventField("annual_growth_pct", "percent"),
    EventField("currency", "currency"),
    EventField("enabled", "toggle"),
)

_RECURRING_FIELDS = tuple(f for f in _BASE_FIELDS if f.key != "one_time_amount")


def _only(*keys: str) -> tuple[EventField, ...]:
    return tuple(f for f in _BASE_FIELDS if f.key in keys)


EVENT_CATALOG: dict[str, EventMeta] = {
    "rent": EventMeta(
        "Rent", EventGroup.HOUSING, DefaultSign.OUTFLOW, _RECURRING_FIELDS
    ),
    "salary": EventMeta(
        "Salary", EventGroup.INCOME, DefaultSign.INFLOW, _RECURRING_FIELDS
    ),
    "buy_home": EventMeta(
        "Buy home",
        EventGroup.HOUSING,
        DefaultSign.MIXED,
        _only("name", "start_month", "end_month", "currency", "enabled"),
    ),
    "baby": EventMeta("Baby", EventGroup.EXPENSE, DefaultSign.OUTFLOW, _BASE_FIELDS),
    "car": EventMeta("Car", EventGroup.EXPENSE, DefaultSign.OUTFLOW, _BASE_FIELDS),
    "travel": EventMeta(
        "Travel", EventGroup.EXPENSE, DefaultSign.OUTFLOW, _BASE_FIELDS
    ),
    "insurance": EventMeta(
        "Insurance", EventGroup.INSURANCE, DefaultSign.OUTFLOW, _BASE_FIELDS
    ),
    "insurance_product": EventMeta(
        "Insurance product",
        EventGroup.INSURANCE,
        DefaultSign.OUTFLOW,
        _only("name", "start_month", "monthly_amount", "currency", "enabled"),
    ),
    "insurance_premium": EventMeta(
        "Insurance premium",
        EventGroup.INSURANCE,
        DefaultSign.OUTFLOW,
        _only(
            "name", "start_month", "end_month", "monthly_amount", "currency", "enabled"
        ),
    ),
    "insurance_payout": EventMeta(
        "Insurance payout", EventGroup.INSURANCE, DefaultSign.INFLOW, _BASE_FIELDS
    ),
    "helper": EventMeta(
        "Helper", EventGroup.EXPENSE, DefaultSign.OUTFLOW, _BASE_FIELDS
    ),
    "investment_contribution": EventMeta(
        "Investment contribution",
        EventGroup.INVESTMENT,
        DefaultSign.OUTFLOW,
        _RECURRING_FIELDS,
    ),
    "investment_withdrawal": EventMeta(
        "Investment withdrawal",
        EventGroup.INVESTMENT,
        DefaultSign.INFLOW,
        _BASE_FIELDS,
    ),
    "tax_benefit": EventMeta(
        "Tax benefit", EventGroup.INSURANCE, DefaultSign.INFLOW, _BASE_FIELDS
    ),
    "custom": EventMeta(
        "Custom", EventGroup.EXPENSE, DefaultSign.MIXED, _BASE_FIELDS
    ),
}

EVENT_GROUPS: tuple[EventGroup, ...] = tuple(EventGroup)


def get_event_meta(event_type: str) -> EventMeta:
    """
    Look up the catalog entry of an event type.

    Raises:
        ConfigError: If the type is not in the catalog
    """
    try:
        return EVENT_CATALOG[event_type]
    except KeyError:
        raise ConfigError(
            f"Unknown event type {event_type!r}; "
            f"known types: {', '.join(EVENT_CATALOG)}"
        ) from None


def get_event_group(event_type: str) -> EventGroup:
    return get_event_meta(event_type).group


def list_event_types_by_group(group: EventGroup | str) -> list[str]:
    """Event types of a group, in catalog order."""
    group = EventGroup(group)
    return [name for name, meta in EVENT_CATALOG.items() if meta.group is group]


def apply_default_sign(event_type: str, amount: float) -> float:
    """
    Sign an amount by the default polarity of its event type.

    Inflow types return ``abs(amount)``, outflow types ``-abs(amount)``; mixed
    types leave the amount as given.

    **Example:**
        ```python
        apply_default_sign("rent", 1200)     # -1200.0
        apply_default_sign("salary", -3000)  # 3000.0
        ```
    """
    sign = get_event_meta(event_type).default_sign
    if sign is DefaultSign.INFLOW:
        return abs(float(amount))
    if sign is DefaultSign.OUTFLOW:
        return -abs(float(amount))
    return float(amount)
