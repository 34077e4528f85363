"""
Pydantic schemas for the WaniKani user API payloads.

Only the fields the analyzer reads are declared; everything else in the
payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class UserInformation(BaseModel):
    """The `user_information` block of a v1 response."""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    title: str = ""
    level: int = 0


class KanjiStats(BaseModel):
    model_config = ConfigDict(extra="ignore")

    srs: Optional[str] = None
    burned: bool = False


class KanjiItem(BaseModel):
    """One kanji entry of `requested_information`."""

    model_config = ConfigDict(extra="ignore")

    character: str
    meaning: Optional[str] = None
    level: Optional[int] = None
    stats: Optional[KanjiStats] = None


class KanjiResponse(BaseModel):
    """Response of `/api/user/{key}/kanji/{levels}`."""

    model_config = ConfigDict(extra="ignore")

    user_information: UserInformation = Field(default_factory=UserInformation)
    requested_information: List[KanjiItem] = Field(default_factory=list)


class LearnerProgress(BaseModel):
    """What the analyzer needs to know about the learner.

    Attributes:
        username (str): WaniKani user name.
        title (str): WaniKani title ("sect").
        level (int): Current level.
        known_kanji (str): Every kanji the learner has unlocked, concatenated.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    title: str = ""
    level: int = 0
    known_kanji: str = ""
