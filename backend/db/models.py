"""SQLAlchemy models for the University Sports platform."""

import uuid

from sqlalchemy import (
    Column, Integer, String, DateTime, Enum, ForeignKey, JSON, func
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import GameStatus, Gender, Role, SportType


def _new_id() -> str:
    return str(uuid.uuid4())


# Shared by fixtures and users so PostgreSQL gets a single GENDER type
_gender_type = Enum(Gender, name="gender")


class University(Base):
    """A university fielding teams across several sports."""

    __tablename__ = "universities"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    location = Column(String(255))
    image_url = Column(String(500))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships (deleting a university detaches, not deletes, its sports and users)
    sports = relationship("Sport", back_populates="university")
    users = relationship("User", back_populates="university")

    def __repr__(self):
        return f"<University(id={self.id}, name='{self.name}')>"


class Sport(Base):
    __tablename__ = "sports"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    type = Column(Enum(SportType, name="sport_type"), nullable=False)
    university_id = Column(
        String(36), ForeignKey("universities.id", ondelete="SET NULL"), index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    university = relationship("University", back_populates="sports")
    fixtures = relationship(
        "Fixture", back_populates="sport", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Sport(id={self.id}, name='{self.name}', type={self.type})>"


class Fixture(Base):
    """A scheduled match between two teams within a sport."""

    __tablename__ = "fixtures"

    id = Column(String(36), primary_key=True, default=_new_id)
    sport_id = Column(
        String(36), ForeignKey("sports.id", ondelete="CASCADE"), nullable=False, index=True
    )
    home_team = Column(String(255), nullable=False)
    away_team = Column(String(255), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    venue = Column(String(255))
    gender = Column(_gender_type, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    sport = relationship("Sport", back_populates="fixtures")
    result = relationship(
        "Result", back_populates="fixture", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Fixture(id={self.id}, teams='{self.home_team} vs {self.away_team}')>"


class Result(Base):
    """Live or final score of a fixture. At most one per fixture."""

    __tablename__ = "results"

    id = Column(String(36), primary_key=True, default=_new_id)
    fixture_id = Column(
        String(36), ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    home_score = Column(Integer, nullable=False, default=0)
    away_score = Column(Integer, nullable=False, default=0)
    home_scorers = Column(JSON, nullable=False, default=list)  # list of player names
    away_scorers = Column(JSON, nullable=False, default=list)
    status = Column(Enum(GameStatus, name="game_status"), nullable=False, default=GameStatus.NOT_STARTED)
    current_period = Column(String(50))  # e.g. "2nd half", "Q3"
    time_elapsed = Column(Integer)       # minutes
    image_url = Column(String(500))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    fixture = relationship("Fixture", back_populates="result")

    def __repr__(self):
        return f"<Result(id={self.id}, score={self.home_score}-{self.away_score}, status={self.status})>"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.STUDENT)
    gender = Column(_gender_type)
    university_id = Column(
        String(36), ForeignKey("universities.id", ondelete="SET NULL"), index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    university = relationship("University", back_populates="users")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
