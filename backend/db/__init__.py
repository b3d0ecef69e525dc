"""Database package for the University Sports platform."""

from .database import Base, engine, SessionLocal, init_db
from .enums import GameStatus, Gender, Role, SportType
from .models import Fixture, Result, Sport, University, User

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "init_db",
    "GameStatus",
    "Gender",
    "Role",
    "SportType",
    "Fixture",
    "Result",
    "Sport",
    "University",
    "User",
]
