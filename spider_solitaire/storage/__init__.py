"""Save file storage."""

from .save_store import ChallengeRecord, SaveData, SaveStore, Statistics

__all__ = [
    "ChallengeRecord",
    "SaveData",
    "SaveStore",
    "Statistics",
]
