"""Data models for the ranking engine."""

from dataclasses import dataclass

from src.sport_manager.catalog_state import Sport


@dataclass(frozen=True)
class RankedSport:
    """A sport's position in a ranking."""

    sport: Sport
    score: float
    rank: int  # 1-based, strictly increasing

    @property
    def name(self) -> str:
        return self.sport.name


@dataclass(frozen=True)
class RankingWarning:
    """A sport left out of a ranking pass because it could not be scored."""

    sport_name: str
    message: str
