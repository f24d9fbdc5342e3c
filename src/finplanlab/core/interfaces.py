"""
Strategy interface protocols for FinPlanLab.
Defines the contract that every position strategy must satisfy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .context import ProjectionContext
from .results import PositionOutput

if TYPE_CHECKING:
    # Only imported for type checking to avoid runtime cycles
    from .specs import Position


@runtime_checkable
class IPositionStrategy(Protocol):
    """
    Contract for POSITION strategies (homes, loans, investments, cars, insurance).
    Responsibilities: expand one position into its per-month cashflow, asset and
    liability contributions over the projection horizon.
    """

    def prepare(self, position: Position, ctx: ProjectionContext) -> None:
        """
        Validate the position against the context.
        Called exactly once before simulate(); must not mutate the position.
        """
        ...

    def simulate(self, position: Position, ctx: ProjectionContext) -> PositionOutput:
        """
        Run the full-horizon simulation for this position.

        Returns:
            PositionOutput with fields:
              - cashflow:            np.ndarray[T] (signed, + inflow / - outflow)
              - assets:              np.ndarray[T]
              - liabilities:         np.ndarray[T]
              - cashflow_by_key:     dict[str, np.ndarray[T]]
              - assets_by_key:       dict[str, np.ndarray[T]]
              - liabilities_by_key:  dict[str, np.ndarray[T]]
              - events:              list[TimelineEvent]
        """
        ...


__all__ = ["IPositionStrategy"]
