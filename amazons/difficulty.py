"""Difficulty tiers and the search profile each one selects.

A profile bundles the three knobs the search is tuned by: nominal depth in
plies, the move cap applied at every node, and the evaluator weights. A
weight of zero switches its term off entirely, which is how the cheaper
tiers avoid the flood-fill cost. All three knobs grow monotonically from
Easy to Hard; the exact numbers are tuning values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .errors import InvalidConfigurationError


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigurationError(
                "Unknown difficulty", context={"difficulty": value}
            ) from None


class PlayerType(Enum):
    HUMAN = "human"
    AI = "ai"

    @classmethod
    def parse(cls, value: Union["PlayerType", str]) -> "PlayerType":
        if isinstance(value, PlayerType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigurationError(
                "Unknown player type", context={"player_type": value}
            ) from None


@dataclass(frozen=True)
class SearchProfile:
    depth: int
    move_cap: int
    # Root candidates searched at full depth; None searches all of them deeply.
    deep_slots: Optional[int]
    mobility_sample: int
    mobility_weight: int
    spatial_weight: int
    territory_weight: int


PROFILES: Dict[Difficulty, SearchProfile] = {
    Difficulty.EASY: SearchProfile(
        depth=1,
        move_cap=6,
        deep_slots=None,
        mobility_sample=48,
        mobility_weight=3,
        spatial_weight=0,
        territory_weight=0,
    ),
    Difficulty.MEDIUM: SearchProfile(
        depth=2,
        move_cap=12,
        deep_slots=None,
        mobility_sample=48,
        mobility_weight=3,
        spatial_weight=1,
        territory_weight=0,
    ),
    Difficulty.HARD: SearchProfile(
        depth=3,
        move_cap=20,
        deep_slots=6,
        mobility_sample=48,
        mobility_weight=3,
        spatial_weight=1,
        territory_weight=5,
    ),
}


def profile_for(difficulty: Union[Difficulty, str]) -> SearchProfile:
    return PROFILES[Difficulty.parse(difficulty)]


def depth_for_difficulty(difficulty: Union[Difficulty, str]) -> int:
    return profile_for(difficulty).depth


def move_cap_for_difficulty(difficulty: Union[Difficulty, str]) -> int:
    return profile_for(difficulty).move_cap
