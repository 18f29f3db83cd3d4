from .user import Role, User
from .assignment import Assignment
from .participant import Participant, Team
from .response_map import ResponseMap, MapType
from .response import Response, ResponseStatus

__all__ = [
    'Role', 'User', 'Assignment', 'Participant', 'Team',
    'ResponseMap', 'MapType', 'Response', 'ResponseStatus'
]
