from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel
from .assignment import Assignment
from .participant import Participant, Team


class MapType(enum.Enum):
    TEAMMATE_REVIEW = "teammate_review"
    PEER_REVIEW = "peer_review"

    @property
    def reviewee_model(self):
        return Team if self is MapType.PEER_REVIEW else Participant

    @property
    def reviewed_object_model(self):
        return Assignment

    @classmethod
    def with_participant_reviewees(cls):
        return [t for t in cls if t is not cls.PEER_REVIEW]

    @classmethod
    def with_team_reviewees(cls):
        return [cls.PEER_REVIEW]


class ResponseMap(BaseModel):
    """Reviewer X reviews object Y belonging to reviewee Z within assignment A"""
    __tablename__ = 'response_maps'
    __table_args__ = (
        UniqueConstraint(
            'reviewer_id', 'reviewee_id', 'reviewed_object_id',
            name='uq_response_maps_reviewer_reviewee_object'
        ),
    )

    map_type = Column(Enum(MapType), default=MapType.TEAMMATE_REVIEW, nullable=False, index=True)
    assignment_id = Column(Integer, ForeignKey('assignments.id'), index=True)
    reviewer_id = Column(Integer, ForeignKey('participants.id'), nullable=False, index=True)

    # Polymorphic, resolved through map_type
    reviewee_id = Column(Integer, nullable=False, index=True)
    reviewed_object_id = Column(Integer, nullable=False)

    # Relationships
    assignment = relationship("Assignment", back_populates="response_maps")
    reviewer = relationship("Participant", back_populates="response_maps_as_reviewer")
    responses = relationship(
        "Response",
        back_populates="response_map",
        cascade="all, delete-orphan",
        order_by="Response.id"
    )
