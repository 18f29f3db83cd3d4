"""
Named read scopes over response maps.

A scope is a QuerySpec: a set of filter predicates plus the outer joins they
need. Specs are immutable and compose with ``&``; the repository applies a
spec to a session query when it runs it.
"""

from dataclasses import dataclass
from typing import Tuple
from sqlalchemy import and_, or_, select
from sqlalchemy.orm import aliased
from peermap.models import Participant, Response, ResponseMap, MapType


@dataclass(frozen=True, eq=False)
class QuerySpec:
    criteria: Tuple = ()
    outer_joins: Tuple = ()  # (target, onclause) pairs

    def __and__(self, other: 'QuerySpec') -> 'QuerySpec':
        return QuerySpec(
            criteria=self.criteria + other.criteria,
            outer_joins=self.outer_joins + other.outer_joins
        )

    def apply(self, query):
        for target, onclause in self.outer_joins:
            query = query.outerjoin(target, onclause)
        if self.criteria:
            query = query.filter(*self.criteria)
        return query


def all_maps() -> QuerySpec:
    return QuerySpec()


def for_team(participant_id: int) -> QuerySpec:
    """Maps whose reviewee is the participant's team or one of its members.

    A participant without a team only matches maps where it is the reviewee.
    """
    member = aliased(Participant)
    team_id = (
        select(Participant.team_id)
        .where(Participant.id == participant_id)
        .correlate(None)
        .scalar_subquery()
    )
    reviews_participant = ResponseMap.map_type.in_(MapType.with_participant_reviewees())
    reviews_team = ResponseMap.map_type.in_(MapType.with_team_reviewees())

    return QuerySpec(
        criteria=(
            or_(
                and_(reviews_team, ResponseMap.reviewee_id == team_id),
                and_(reviews_participant, member.team_id == team_id),
                and_(reviews_participant, ResponseMap.reviewee_id == participant_id),
            ),
        ),
        outer_joins=(
            (member, and_(reviews_participant, member.id == ResponseMap.reviewee_id)),
        )
    )


def by_reviewer(participant_id: int) -> QuerySpec:
    return QuerySpec(criteria=(ResponseMap.reviewer_id == participant_id,))


def for_assignment(assignment_id: int) -> QuerySpec:
    return QuerySpec(criteria=(ResponseMap.assignment_id == assignment_id,))


def with_responses() -> QuerySpec:
    return QuerySpec(criteria=(ResponseMap.responses.any(),))


def with_submitted_responses() -> QuerySpec:
    return QuerySpec(criteria=(ResponseMap.responses.any(Response.is_submitted.is_(True)),))
