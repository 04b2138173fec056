"""Daily challenge derivation.

Every calendar date maps to a fixed seed, difficulty and name so that all
players get the same deal on the same day.
"""

import calendar
import datetime

from pydantic import BaseModel

from spider_solitaire.models.card import Difficulty

CHALLENGE_NAMES = [
    "Spider Web",
    "Card Master",
    "Tough Hands",
    "Patient Player",
    "Tight Spot",
    "Suit Collector",
    "Strategic Move",
]


class DailyChallenge(BaseModel, frozen=True):
    """Challenge for a single day."""

    date: datetime.date
    seed: int
    difficulty: Difficulty
    name: str


def challenge_seed(day: datetime.date) -> int:
    """Seed for a date: year * 1000 + day of year."""
    return day.year * 1000 + day.timetuple().tm_yday


def challenge_difficulty(day: datetime.date) -> Difficulty:
    """Weekend is hard, Monday/Wednesday/Friday medium, otherwise easy."""
    weekday = day.weekday()  # Monday = 0
    if weekday >= 5:
        return Difficulty.HARD
    if weekday in (0, 2, 4):
        return Difficulty.MEDIUM
    return Difficulty.EASY


def daily_challenge(day: datetime.date) -> DailyChallenge:
    """Derive the challenge for a date."""
    day_of_year = day.timetuple().tm_yday
    title = CHALLENGE_NAMES[day_of_year % len(CHALLENGE_NAMES)]
    return DailyChallenge(
        date=day,
        seed=challenge_seed(day),
        difficulty=challenge_difficulty(day),
        name=f"{day.strftime('%d.%m.%Y')} - {title}",
    )


def month_challenges(year: int, month: int) -> list[DailyChallenge]:
    """Challenges for every day of a month."""
    _, days = calendar.monthrange(year, month)
    return [daily_challenge(datetime.date(year, month, d)) for d in range(1, days + 1)]


def challenge_for_seed(seed: int | None) -> DailyChallenge | None:
    """Recover the challenge a seed was derived from, if any."""
    if seed is None:
        return None
    year, day_of_year = divmod(seed, 1000)
    if not 1 <= year <= 9999 or not 1 <= day_of_year <= (366 if calendar.isleap(year) else 365):
        return None
    day = datetime.date(year, 1, 1) + datetime.timedelta(days=day_of_year - 1)
    return daily_challenge(day)
