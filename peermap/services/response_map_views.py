from typing import List, Optional
from peermap.models import ResponseMap
from peermap.repositories import ResponseMapRepository
from peermap.repositories import scopes
from peermap.utils.logger import get_logger

logger = get_logger(__name__)


class ResponseMapViews:
    """The sanctioned read API over response maps.

    Callers go through these views instead of building their own joins, so
    the participant -> team -> assignment resolution lives in one place.
    """

    def __init__(self, database):
        self.response_maps = ResponseMapRepository(database)

    def for_team(self, participant_id: int) -> List[ResponseMap]:
        """Maps reviewing the participant's team or any of its members"""
        return self.response_maps.for_team(participant_id)

    def by_reviewer(self, participant_id: int, assignment_id: Optional[int] = None) -> List[ResponseMap]:
        """Maps where the participant is the reviewer, optionally within one assignment"""
        spec = scopes.by_reviewer(participant_id)
        if assignment_id is not None:
            spec = spec & scopes.for_assignment(assignment_id)
        return self.response_maps.find(spec)

    def for_assignment(self, assignment_id: int) -> List[ResponseMap]:
        return self.response_maps.for_assignment(assignment_id)

    def with_responses(self, submitted_only: bool = False) -> List[ResponseMap]:
        """Maps with at least one response, or at least one submitted response"""
        if submitted_only:
            return self.response_maps.with_submitted_responses()
        return self.response_maps.with_responses()
