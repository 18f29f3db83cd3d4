"""
Ordered validation functions for response maps and responses.

Each validator takes the open session, the candidate attributes and the id of
the row being updated (if any), and returns a list of FieldError values. None
of them raise; the repositories turn a non-empty result into an exception.
"""

from typing import Dict, List, Optional
from peermap.errors import FieldError, MissingField, ForeignKeyInvalid, DuplicateMapping
from peermap.models import Assignment, Participant, ResponseMap, MapType

REQUIRED_MAP_FIELDS = ('reviewer_id', 'reviewee_id', 'reviewed_object_id')

BLANK_MESSAGE = "can't be blank"
DUPLICATE_MESSAGE = "Duplicate response map is not allowed."


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolves(db, model, value) -> bool:
    """Check that value is the id of an existing row of model"""
    return is_valid_id(value) and db.get(model, value) is not None


def _missing(field: str) -> FieldError:
    return FieldError(field, MissingField.code, BLANK_MESSAGE)


def _unresolved(field: str, model) -> FieldError:
    return FieldError(field, ForeignKeyInvalid.code, f"does not reference an existing {model.__name__}")


def validate_presence(db, attrs: Dict, exclude_id: Optional[int] = None) -> List[FieldError]:
    return [_missing(field) for field in REQUIRED_MAP_FIELDS if is_blank(attrs.get(field))]


def validate_references(db, attrs: Dict, exclude_id: Optional[int] = None) -> List[FieldError]:
    map_type = attrs.get('map_type') or MapType.TEAMMATE_REVIEW
    checks = [
        ('reviewer_id', Participant),
        ('reviewee_id', map_type.reviewee_model),
        ('reviewed_object_id', map_type.reviewed_object_model),
    ]
    if not is_blank(attrs.get('assignment_id')):
        checks.append(('assignment_id', Assignment))

    return [
        _unresolved(field, model)
        for field, model in checks
        if not resolves(db, model, attrs.get(field))
    ]


def validate_uniqueness(db, attrs: Dict, exclude_id: Optional[int] = None) -> List[FieldError]:
    query = db.query(ResponseMap.id).filter(
        ResponseMap.reviewer_id == attrs['reviewer_id'],
        ResponseMap.reviewee_id == attrs['reviewee_id'],
        ResponseMap.reviewed_object_id == attrs['reviewed_object_id']
    )
    if exclude_id is not None:
        query = query.filter(ResponseMap.id != exclude_id)

    if query.first() is not None:
        return [duplicate_error()]
    return []


def duplicate_error() -> FieldError:
    # Reported on reviewee_id, but the constraint covers the whole triple
    return FieldError('reviewee_id', DuplicateMapping.code, DUPLICATE_MESSAGE)


RESPONSE_MAP_VALIDATORS = (
    validate_presence,
    validate_references,
    validate_uniqueness,
)


def validate_response_map(db, attrs: Dict, exclude_id: Optional[int] = None) -> List[FieldError]:
    """Run the validators in order and stop at the first failing stage"""
    for validator in RESPONSE_MAP_VALIDATORS:
        errors = validator(db, attrs, exclude_id)
        if errors:
            return errors
    return []


def validate_response(db, attrs: Dict) -> List[FieldError]:
    map_id = attrs.get('map_id')
    if is_blank(map_id):
        return [_missing('map_id')]
    if not resolves(db, ResponseMap, map_id):
        return [_unresolved('map_id', ResponseMap)]
    return []
