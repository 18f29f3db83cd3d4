from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Role(BaseModel):
    __tablename__ = 'roles'

    name = Column(String(100), unique=True, nullable=False)

    # Relationships
    users = relationship("User", back_populates="role", lazy='dynamic')


class User(BaseModel):
    __tablename__ = 'users'

    role_id = Column(Integer, ForeignKey('roles.id'), nullable=False)

    # Basic Info
    name = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(255))
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    role = relationship("Role", back_populates="users")
    participants = relationship("Participant", back_populates="user", lazy='dynamic')
    assignments_taught = relationship("Assignment", back_populates="instructor", lazy='dynamic')
