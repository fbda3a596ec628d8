"""Formation descriptor parsing and slot generation."""

import logging
from dataclasses import dataclass

from .constants import DEF, DEFAULT_FORMATION, FWD, GK, MID, SLOT_PREFIXES

logger = logging.getLogger('clubftp.formation')


@dataclass(frozen=True)
class Formation:
    """Outfield line counts; the goalkeeper is implicit."""
    defenders: int
    midfielders: int
    forwards: int

    @property
    def descriptor(self) -> str:
        return f'{self.defenders}-{self.midfielders}-{self.forwards}'

    @property
    def total_slots(self) -> int:
        return 1 + self.defenders + self.midfielders + self.forwards


@dataclass(frozen=True)
class Slot:
    """A roster slot, e.g. Slot('def2', 'DEF')."""
    key: str
    position: str


def _parse_count(part: str, default: int) -> int:
    try:
        count = int(part.strip())
    except ValueError:
        return default
    return count if count > 0 else default


def resolve_formation(descriptor: str | None) -> Formation:
    """
    Parse a formation descriptor like "4-4-2".

    The first three hyphen-separated parts are defenders, midfielders and
    forwards. Fewer than three parts gives the default 4-4-2; a part that
    is not a positive integer falls back to that line's default count.

    Args:
        descriptor: Stored formation string (may be empty or None)

    Returns:
        Formation
    """
    default_def, default_mid, default_fwd = DEFAULT_FORMATION
    parts = (descriptor or '').split('-')

    if len(parts) < 3:
        if descriptor:
            logger.debug(f'Unrecognized formation {descriptor!r}, using default')
        return Formation(default_def, default_mid, default_fwd)

    formation = Formation(
        _parse_count(parts[0], default_def),
        _parse_count(parts[1], default_mid),
        _parse_count(parts[2], default_fwd),
    )
    if formation.descriptor != '-'.join(p.strip() for p in parts[:3]):
        logger.debug(f'Formation {descriptor!r} partially invalid, resolved to {formation.descriptor}')
    return formation


def build_slots(formation: Formation) -> list[Slot]:
    """Goalkeeper first, then defenders, midfielders and forwards, each numbered from 1."""
    slots = [Slot(f'{SLOT_PREFIXES[GK]}1', GK)]
    for position, count in ((DEF, formation.defenders), (MID, formation.midfielders), (FWD, formation.forwards)):
        slots.extend(Slot(f'{SLOT_PREFIXES[position]}{i}', position) for i in range(1, count + 1))
    return slots
