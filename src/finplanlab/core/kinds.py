"""
FinPlanLab Kind Constants (position discriminators and aggregation buckets).
"""


class K:
    # === Positions (structured holdings) ===
    P_HOME = "p.home"  # Owner-occupied or rental property, optional mortgage
    P_LOAN = "p.loan"  # Amortizing personal/consumer loan
    P_INVESTMENT = "p.investment"  # Compounding portfolio with contributions
    P_CAR = "p.car"  # Depreciating vehicle, optional car loan
    P_INSURANCE = "p.insurance"  # Premium-paying policy, optional cash value

    @classmethod
    def all_kinds(cls) -> list[str]:
        """Enumerate all known kinds (for validation and docs)."""
        return [
            cls.P_HOME,
            cls.P_LOAN,
            cls.P_INVESTMENT,
            cls.P_CAR,
            cls.P_INSURANCE,
        ]


# Asset bucket of ProjectionResult.assets each kind reports into
ASSET_BUCKETS: dict[str, str] = {
    K.P_HOME: "housing",
    K.P_INVESTMENT: "investments",
    K.P_CAR: "cars",
    K.P_INSURANCE: "insurance",
}

# Liability bucket of ProjectionResult.liabilities each kind reports into
LIABILITY_BUCKETS: dict[str, str] = {
    K.P_HOME: "mortgage",
    K.P_LOAN: "loans",
    K.P_CAR: "auto",
}

# Prefix used for breakdown ledger keys and generated position ids
KEY_PREFIXES: dict[str, str] = {
    K.P_HOME: "home",
    K.P_LOAN: "loan",
    K.P_INVESTMENT: "investment",
    K.P_CAR: "car",
    K.P_INSURANCE: "insurance",
}
