"""SQLAlchemy database models."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

from src.vehicle_registry.domain.constants import MAX_TEXT_LENGTH

Base = declarative_base()


class AdministratorModel(Base):
    """SQLAlchemy model for administrators."""

    __tablename__ = "administrators"

    id = Column(Integer, primary_key=True, autoincrement=True)

    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=True)

    # pbkdf2_sha256$<iterations>$<salt>$<hash>, see PasswordHasher
    password_hash = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<AdministratorModel(id={self.id}, email='{self.email}')>"


class VehicleModel(Base):
    """SQLAlchemy model for vehicles."""

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)

    make = Column(String(MAX_TEXT_LENGTH), nullable=False)
    model = Column(String(MAX_TEXT_LENGTH), nullable=False)
    year = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<VehicleModel(id={self.id}, make='{self.make}', model='{self.model}')>"
