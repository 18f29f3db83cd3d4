from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel


class ResponseStatus(enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"


class Response(BaseModel):
    __tablename__ = 'responses'

    map_id = Column(Integer, ForeignKey('response_maps.id', ondelete='CASCADE'), nullable=False, index=True)
    is_submitted = Column(Boolean, default=False, nullable=False, index=True)

    # Review metadata
    round = Column(Integer, default=1, nullable=False)
    additional_comment = Column(String(2000))
    submitted_at = Column(DateTime)

    # Relationships
    response_map = relationship("ResponseMap", back_populates="responses")

    @property
    def status(self):
        return ResponseStatus.SUBMITTED if self.is_submitted else ResponseStatus.DRAFT
