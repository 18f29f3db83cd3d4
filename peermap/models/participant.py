from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class Team(BaseModel):
    __tablename__ = 'teams'

    assignment_id = Column(Integer, ForeignKey('assignments.id'), nullable=False, index=True)
    name = Column(String(255))

    # Relationships
    assignment = relationship("Assignment", back_populates="teams")
    members = relationship("Participant", back_populates="team", lazy='dynamic')


class Participant(BaseModel):
    """A user's enrollment in one assignment"""
    __tablename__ = 'participants'
    __table_args__ = (
        UniqueConstraint('user_id', 'assignment_id', name='uq_participants_user_assignment'),
    )

    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    assignment_id = Column(Integer, ForeignKey('assignments.id'), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey('teams.id'), index=True)  # at most one team per assignment

    # Relationships
    user = relationship("User", back_populates="participants")
    assignment = relationship("Assignment", back_populates="participants")
    team = relationship("Team", back_populates="members")
    response_maps_as_reviewer = relationship("ResponseMap", back_populates="reviewer", lazy='dynamic')
