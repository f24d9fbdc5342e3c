"""
Input specification classes for FinPlanLab projections.

Every optional field carries a total default here, so strategies never have to
deal with "maybe missing" values. Plain dictionaries (camelCase or snake_case
keys) are normalized once by the ``from_dict`` constructors, which also
validate month strings and required fields.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar, Union

from .errors import ConfigError
from .kinds import KEY_PREFIXES, K
from .utils import parse_month

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _normalize_keys(data: Mapping[str, Any], cls: type) -> dict[str, Any]:
    """Map camelCase/snake_case keys onto the dataclass fields of ``cls``."""
    if not isinstance(data, Mapping):
        raise ConfigError(f"{cls.__name__} must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    out: dict[str, Any] = {}
    for key, value in data.items():
        name = _snake(str(key))
        if name in known:
            out[name] = value
    return out


def _num(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"Expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Expected a number, got {value!r}") from e


def _int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    number = _num(value)
    if number != int(number):
        raise ConfigError(f"Expected a whole number, got {value!r}")
    return int(number)


def _opt_num(value: Any) -> float | None:
    return None if value is None else _num(value)


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"Expected true or false, got {value!r}")
    return value


def _month(value: Any, field_name: str, owner: str) -> str:
    if value is None or value == "":
        raise ConfigError(f"{owner}: missing required month field '{field_name}'")
    parse_month(value)
    return value


def _opt_month(value: Any) -> str | None:
    if value is None or value == "":
        return None
    parse_month(value)
    return value


# ---------------------------------------------------------------------------
# Events and assumptions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CashflowEvent:
    """
    Recurring and/or one-time signed cashflow.

    Attributes:
        start_month: First month the event applies (the one-time amount lands here)
        enabled: Disabled events contribute nothing
        end_month: Last month (inclusive); None means through the horizon end
        monthly_amount: Recurring amount (+ inflow / - outflow)
        one_time_amount: Amount applied once in start_month
        annual_growth_pct: Annual growth of the recurring amount as a fraction;
            None means unresolved (treated as 0 unless an assumption fills it)
        id: Optional identifier used for breakdown keys
        type: Optional catalog type (e.g. "rent", "salary")
        name: Optional display name
    """

    start_month: str
    enabled: bool = True
    end_month: str | None = None
    monthly_amount: float = 0.0
    one_time_amount: float = 0.0
    annual_growth_pct: float | None = None
    id: str | None = None
    type: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if self.annual_growth_pct is not None and self.annual_growth_pct <= -1:
            raise ConfigError(
                f"event {self.id or self.type or ''}: annual_growth_pct must be > -1"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CashflowEvent:
        d = _normalize_keys(data, cls)
        owner = f"event {d.get('id') or d.get('type') or d.get('name') or ''}".strip()
        return cls(
            start_month=_month(d.get("start_month"), "start_month", owner),
            enabled=_flag(d.get("enabled"), True),
            end_month=_opt_month(d.get("end_month")),
            monthly_amount=_num(d.get("monthly_amount")),
            one_time_amount=_num(d.get("one_time_amount")),
            annual_growth_pct=_opt_num(d.get("annual_growth_pct")),
            id=d.get("id"),
            type=d.get("type"),
            name=d.get("name"),
        )


@dataclass(frozen=True)
class EventAssumptions:
    """Scenario-level growth assumptions used to fill missing event growth rates."""

    inflation_rate: float | None = None
    rent_annual_growth_pct: float | None = None
    salary_growth_rate: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EventAssumptions:
        d = _normalize_keys(data, cls)
        return cls(**{k: _opt_num(v) for k, v in d.items()})


# ---------------------------------------------------------------------------
# Homes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MortgageTerms:
    principal: float = 0.0
    annual_rate: float = 0.0
    term_months: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MortgageTerms:
        d = _normalize_keys(data, cls)
        return cls(
            principal=_num(d.get("principal")),
            annual_rate=_num(d.get("annual_rate")),
            term_months=_int(d.get("term_months")),
        )


@dataclass(frozen=True)
class ExistingHome:
    """Snapshot of an already-owned home as of ``as_of_month``."""

    as_of_month: str
    market_value: float = 0.0
    mortgage_balance: float = 0.0
    remaining_term_months: int = 0
    annual_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExistingHome:
        d = _normalize_keys(data, cls)
        return cls(
            as_of_month=_month(d.get("as_of_month"), "as_of_month", "existing home"),
            market_value=_num(d.get("market_value")),
            mortgage_balance=_num(d.get("mortgage_balance")),
            remaining_term_months=_int(d.get("remaining_term_months")),
            annual_rate=_num(d.get("annual_rate")),
        )


@dataclass(frozen=True)
class RentalIncome:
    rent_monthly: float
    rent_start_month: str
    rent_end_month: str | None = None
    rent_annual_growth: float = 0.0
    vacancy_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RentalIncome:
        d = _normalize_keys(data, cls)
        return cls(
            rent_monthly=_num(d.get("rent_monthly")),
            rent_start_month=_month(
                d.get("rent_start_month"), "rent_start_month", "rental"
            ),
            rent_end_month=_opt_month(d.get("rent_end_month")),
            rent_annual_growth=_num(d.get("rent_annual_growth")),
            vacancy_rate=_num(d.get("vacancy_rate")),
        )


@dataclass(frozen=True)
class HomePosition:
    """
    A home, either bought during the projection or already owned.

    New-purchase mode uses purchase_price / down_payment / purchase_month and an
    optional mortgage. Existing mode uses the ``existing`` snapshot. When ``mode``
    is not given it resolves to "existing" if a snapshot is present.
    """

    kind: ClassVar[str] = K.P_HOME

    annual_appreciation: float = 0.0
    mode: str | None = None
    purchase_price: float = 0.0
    purchase_month: str | None = None
    down_payment: float = 0.0
    mortgage: MortgageTerms | None = None
    fees_one_time: float = 0.0
    holding_cost_monthly: float = 0.0
    holding_cost_annual_growth: float = 0.0
    existing: ExistingHome | None = None
    rental: RentalIncome | None = None
    usage: str | None = None
    name: str | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        if self.mode not in (None, "new_purchase", "existing"):
            raise ConfigError(
                f"home {self.id or ''}: mode must be 'new_purchase' or 'existing', "
                f"got {self.mode!r}"
            )

    @property
    def resolved_mode(self) -> str:
        if self.mode is not None:
            return self.mode
        return "existing" if self.existing is not None else "new_purchase"

    @property
    def is_existing(self) -> bool:
        return self.resolved_mode == "existing" and self.existing is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HomePosition:
        d = _normalize_keys(data, cls)
        mortgage = d.get("mortgage")
        existing = d.get("existing")
        rental = d.get("rental")
        return cls(
            annual_appreciation=_num(d.get("annual_appreciation")),
            mode=d.get("mode"),
            purchase_price=_num(d.get("purchase_price")),
            purchase_month=_opt_month(d.get("purchase_month")),
            down_payment=_num(d.get("down_payment")),
            mortgage=MortgageTerms.from_dict(mortgage) if mortgage else None,
            fees_one_time=_num(d.get("fees_one_time")),
            holding_cost_monthly=_num(d.get("holding_cost_monthly")),
            holding_cost_annual_growth=_num(d.get("holding_cost_annual_growth")),
            existing=ExistingHome.from_dict(existing) if existing else None,
            rental=RentalIncome.from_dict(rental) if rental else None,
            usage=d.get("usage"),
            name=d.get("name"),
            id=d.get("id"),
        )


# ---------------------------------------------------------------------------
# Loans, investments, cars, insurance
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoanPosition:
    """Amortizing loan; ``monthly_payment`` overrides the computed level payment."""

    kind: ClassVar[str] = K.P_LOAN

    start_month: str
    principal: float = 0.0
    annual_interest_rate: float = 0.0
    term_months: int = 0
    monthly_payment: float | None = None
    fees_one_time: float = 0.0
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoanPosition:
        d = _normalize_keys(data, cls)
        return cls(
            start_month=_month(d.get("start_month"), "start_month", "loan"),
            principal=_num(d.get("principal")),
            annual_interest_rate=_num(d.get("annual_interest_rate")),
            term_months=_int(d.get("term_months")),
            monthly_payment=_opt_num(d.get("monthly_payment")),
            fees_one_time=_num(d.get("fees_one_time")),
            id=d.get("id"),
        )


@dataclass(frozen=True)
class InvestmentPosition:
    """Portfolio compounding monthly, fed by contributions from cash."""

    kind: ClassVar[str] = K.P_INVESTMENT

    start_month: str
    initial_value: float = 0.0
    annual_return_rate: float = 0.0
    monthly_contribution: float = 0.0
    monthly_withdrawal: float = 0.0
    fee_annual_rate: float | None = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InvestmentPosition:
        d = _normalize_keys(data, cls)
        return cls(
            start_month=_month(d.get("start_month"), "start_month", "investment"),
            initial_value=_num(d.get("initial_value")),
            annual_return_rate=_num(d.get("annual_return_rate")),
            monthly_contribution=_num(d.get("monthly_contribution")),
            monthly_withdrawal=_num(d.get("monthly_withdrawal")),
            fee_annual_rate=_opt_num(d.get("fee_annual_rate")),
            id=d.get("id"),
        )


@dataclass(frozen=True)
class CarLoan:
    principal: float = 0.0
    annual_interest_rate: float = 0.0
    term_months: int = 0
    monthly_payment: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CarLoan:
        d = _normalize_keys(data, cls)
        return cls(
            principal=_num(d.get("principal")),
            annual_interest_rate=_num(d.get("annual_interest_rate")),
            term_months=_int(d.get("term_months")),
            monthly_payment=_opt_num(d.get("monthly_payment")),
        )


@dataclass(frozen=True)
class CarPosition:
    """Vehicle depreciating from its purchase price, with growing running costs."""

    kind: ClassVar[str] = K.P_CAR

    purchase_month: str
    purchase_price: float = 0.0
    down_payment: float = 0.0
    annual_depreciation_rate: float = 0.0
    holding_cost_monthly: float = 0.0
    holding_cost_annual_growth: float = 0.0
    loan: CarLoan | None = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CarPosition:
        d = _normalize_keys(data, cls)
        loan = d.get("loan")
        return cls(
            purchase_month=_month(d.get("purchase_month"), "purchase_month", "car"),
            purchase_price=_num(d.get("purchase_price")),
            down_payment=_num(d.get("down_payment")),
            annual_depreciation_rate=_num(d.get("annual_depreciation_rate")),
            holding_cost_monthly=_num(d.get("holding_cost_monthly")),
            holding_cost_annual_growth=_num(d.get("holding_cost_annual_growth")),
            loan=CarLoan.from_dict(loan) if loan else None,
            id=d.get("id"),
        )


@dataclass(frozen=True)
class InsurancePosition:
    """Insurance policy paying a monthly premium, optionally building cash value."""

    kind: ClassVar[str] = K.P_INSURANCE

    insurance_type: str = "life"
    premium_monthly: float = 0.0
    has_cash_value: bool = False
    cash_value: float = 0.0
    cash_value_annual_growth: float = 0.0
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InsurancePosition:
        d = _normalize_keys(data, cls)
        return cls(
            insurance_type=d.get("insurance_type") or "life",
            premium_monthly=_num(d.get("premium_monthly")),
            has_cash_value=_flag(d.get("has_cash_value"), False),
            cash_value=_num(d.get("cash_value")),
            cash_value_annual_growth=_num(d.get("cash_value_annual_growth")),
            id=d.get("id"),
        )


Position = Union[
    HomePosition, LoanPosition, InvestmentPosition, CarPosition, InsurancePosition
]


def position_key(position: Position) -> str:
    """Ledger key for a position, e.g. ``home:main`` or ``loan:loan-2``."""
    prefix = KEY_PREFIXES[position.kind]
    return f"{prefix}:{position.id or prefix}"


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------


def _collection(data: Mapping[str, Any], key: str, cls: type) -> tuple:
    items = data.get(key) or []
    if isinstance(items, Mapping) or isinstance(items, str):
        raise ConfigError(f"positions.{key} must be a list")
    return tuple(item if isinstance(item, cls) else cls.from_dict(item) for item in items)


@dataclass(frozen=True)
class PositionsInput:
    """
    Bundle of position collections.

    Note:
        The legacy singular ``home`` key is normalized to ``homes=[home]`` when
        ``homes`` is absent, so downstream code only ever sees the list form.
    """

    homes: tuple[HomePosition, ...] = ()
    loans: tuple[LoanPosition, ...] = ()
    investments: tuple[InvestmentPosition, ...] = ()
    cars: tuple[CarPosition, ...] = ()
    insurances: tuple[InsurancePosition, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PositionsInput:
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("positions must be a mapping")
        d = {_snake(str(k)): v for k, v in data.items()}
        if d.get("homes") is None and d.get("home"):
            d["homes"] = [d["home"]]
        return cls(
            homes=_collection(d, "homes", HomePosition),
            loans=_collection(d, "loans", LoanPosition),
            investments=_collection(d, "investments", InvestmentPosition),
            cars=_collection(d, "cars", CarPosition),
            insurances=_collection(d, "insurances", InsurancePosition),
        )

    def iter_positions(self) -> Iterator[Position]:
        """
        Yield every position, kind by kind, with an id assigned.

        Positions without an id are numbered 1-based within their kind
        (``home-1``, ``loan-2``, ...). The stored positions are not modified.
        """
        for group in (self.homes, self.loans, self.investments, self.cars, self.insurances):
            for i, position in enumerate(group):
                if position.id is None:
                    position = replace(
                        position, id=f"{KEY_PREFIXES[position.kind]}-{i + 1}"
                    )
                yield position

    def __len__(self) -> int:
        return sum(
            len(g)
            for g in (self.homes, self.loans, self.investments, self.cars, self.insurances)
        )


@dataclass(frozen=True)
class ProjectionInput:
    """
    A projection request.

    Attributes:
        base_month: First month of the horizon (``YYYY-MM``)
        horizon_months: Number of simulated months (> 0)
        initial_cash: Cash balance before month 0
        events: Signed cashflow events
        positions: Structured holdings
    """

    base_month: str
    horizon_months: int
    initial_cash: float = 0.0
    events: tuple[CashflowEvent, ...] = ()
    positions: PositionsInput = PositionsInput()

    def __post_init__(self) -> None:
        parse_month(self.base_month)
        if isinstance(self.horizon_months, bool) or not isinstance(
            self.horizon_months, int
        ):
            raise ConfigError(
                f"horizon_months must be an integer, got {self.horizon_months!r}"
            )
        if self.horizon_months <= 0:
            raise ConfigError(
                f"horizon_months must be positive, got {self.horizon_months}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectionInput:
        d = _normalize_keys(data, cls)
        base_month = d.get("base_month")
        if base_month is None:
            raise ConfigError("Missing required field 'base_month'")
        if d.get("horizon_months") is None:
            raise ConfigError("Missing required field 'horizon_months'")
        events = d.get("events") or []
        return cls(
            base_month=base_month,
            horizon_months=_int(d["horizon_months"]),
            initial_cash=_num(d.get("initial_cash")),
            events=tuple(
                e if isinstance(e, CashflowEvent) else CashflowEvent.from_dict(e)
                for e in events
            ),
            positions=(
                d["positions"]
                if isinstance(d.get("positions"), PositionsInput)
                else PositionsInput.from_dict(d.get("positions"))
            ),
        )
