from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Assignment(BaseModel):
    __tablename__ = 'assignments'

    name = Column(String(255), nullable=False)
    instructor_id = Column(Integer, ForeignKey('users.id'), nullable=False)

    # Relationships
    instructor = relationship("User", back_populates="assignments_taught")
    participants = relationship("Participant", back_populates="assignment", lazy='dynamic')
    teams = relationship("Team", back_populates="assignment", lazy='dynamic')
    response_maps = relationship("ResponseMap", back_populates="assignment", lazy='dynamic')
