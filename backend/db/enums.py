"""Closed value sets shared by the ORM models and the API schemas.

Values equal names so the strings stored in the database, sent on the wire
and accepted as filters are all the same.
"""

import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    COACH = "COACH"
    STUDENT = "STUDENT"
    STAFF = "STAFF"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class GameStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"


class SportType(str, enum.Enum):
    TEAM = "TEAM"
    INDIVIDUAL = "INDIVIDUAL"
