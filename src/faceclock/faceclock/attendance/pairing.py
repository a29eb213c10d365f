from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.exceptions import ValidationError
from .model import SessionEvent


@dataclass(frozen=True)
class PairedSession:
    check_in: SessionEvent
    check_out: Optional[SessionEvent]

    @property
    def is_open(self) -> bool:
        return self.check_out is None


def sort_events(events: Iterable[SessionEvent]) -> list[SessionEvent]:
    """Events ascending by ``time``; acceptance order breaks ties."""
    return sorted(events, key=lambda e: e.time)


class PairingStrategy(ABC):
    """Strategy Pattern: decide which check-out closes which check-in."""

    @abstractmethod
    def pair(self, check_ins: Sequence[SessionEvent], check_outs: Sequence[SessionEvent]) -> list[PairedSession]:
        raise NotImplementedError


class PositionalPairing(PairingStrategy):
    """i-th check-in (sorted) with i-th check-out (sorted); leftovers stay open."""

    def pair(self, check_ins: Sequence[SessionEvent], check_outs: Sequence[SessionEvent]) -> list[PairedSession]:
        ins = sort_events(check_ins)
        outs = sort_events(check_outs)
        return [PairedSession(check_in=ci, check_out=outs[i] if i < len(outs) else None) for i, ci in enumerate(ins)]


class NextCheckoutPairing(PairingStrategy):
    """Each sorted check-in takes the first check-out strictly after it.

    A check-out may close more than one check-in under this rule.
    """

    def pair(self, check_ins: Sequence[SessionEvent], check_outs: Sequence[SessionEvent]) -> list[PairedSession]:
        outs = sort_events(check_outs)
        sessions: list[PairedSession] = []
        for ci in sort_events(check_ins):
            co = next((o for o in outs if o.time > ci.time), None)
            sessions.append(PairedSession(check_in=ci, check_out=co))
        return sessions


DEFAULT_PAIRING: PairingStrategy = PositionalPairing()

PAIRING_STRATEGIES: dict[str, type[PairingStrategy]] = {
    "positional": PositionalPairing,
    "next_checkout": NextCheckoutPairing,
}


def pairing_for(name: str) -> PairingStrategy:
    """Strategy selected by the ``PAIRING`` setting."""
    try:
        return PAIRING_STRATEGIES[str(name).strip().lower()]()
    except KeyError:
        raise ValidationError(f"Unknown pairing strategy: {name!r}")
