from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from peermap.errors import DuplicateMapping, FieldError, raise_for
from peermap.models import ResponseMap, MapType
from peermap.repositories import scopes
from peermap.repositories.scopes import QuerySpec
from peermap.utils.logger import get_logger
from peermap.utils.validators import validate_response_map, duplicate_error

logger = get_logger(__name__)

MAP_FIELDS = ('map_type', 'assignment_id', 'reviewer_id', 'reviewee_id', 'reviewed_object_id')


class ResponseMapRepository:
    """Owns response map rows and the scopes that read them"""

    def __init__(self, database):
        self.database = database

    def create(self, assignment_id, reviewer_id, reviewee_id, reviewed_object_id,
               map_type=MapType.TEAMMATE_REVIEW) -> ResponseMap:
        """Validate and insert a response map in a single transaction"""
        attrs = self._normalize({
            'map_type': map_type,
            'assignment_id': assignment_id,
            'reviewer_id': reviewer_id,
            'reviewee_id': reviewee_id,
            'reviewed_object_id': reviewed_object_id
        })

        with self.database.get_db() as db:
            self._check(db, attrs)

            response_map = ResponseMap(**attrs)
            db.add(response_map)
            self._flush(db)

            logger.info(
                f"Created response map {response_map.id}: reviewer {reviewer_id} -> "
                f"reviewee {reviewee_id} (object {reviewed_object_id})"
            )
            return response_map

    def get(self, map_id: int) -> Optional[ResponseMap]:
        with self.database.get_db() as db:
            return db.get(ResponseMap, map_id)

    def update(self, map_id: int, **fields) -> Optional[ResponseMap]:
        """Re-validate and apply field changes; the row itself is not a duplicate of itself"""
        unknown = set(fields) - set(MAP_FIELDS)
        if unknown:
            raise ValueError(f"Unknown response map field(s): {', '.join(sorted(unknown))}")
        fields = self._normalize(fields)

        with self.database.get_db() as db:
            response_map = db.get(ResponseMap, map_id)
            if not response_map:
                return None

            attrs = {field: getattr(response_map, field) for field in MAP_FIELDS}
            attrs.update(fields)
            self._check(db, attrs, exclude_id=map_id)

            for key, value in fields.items():
                setattr(response_map, key, value)
            self._flush(db)

            logger.info(f"Updated response map {map_id}: {', '.join(sorted(fields))}")
            return response_map

    def delete(self, map_id: int) -> bool:
        """Delete a response map together with its responses"""
        with self.database.get_db() as db:
            response_map = db.get(ResponseMap, map_id)
            if not response_map:
                return False

            db.delete(response_map)
            logger.info(f"Deleted response map {map_id}")
            return True

    def validate(self, fields: Dict, exclude_id: Optional[int] = None) -> List[FieldError]:
        """Return the validation errors for a candidate map without writing anything"""
        attrs = {field: None for field in MAP_FIELDS}
        attrs['map_type'] = MapType.TEAMMATE_REVIEW
        attrs.update(self._normalize(fields))

        with self.database.get_db() as db:
            return validate_response_map(db, attrs, exclude_id)

    # Scopes

    def find(self, spec: QuerySpec) -> List[ResponseMap]:
        with self.database.get_db() as db:
            query = spec.apply(db.query(ResponseMap))
            return query.order_by(ResponseMap.id).all()

    def for_team(self, participant_id: int) -> List[ResponseMap]:
        return self.find(scopes.for_team(participant_id))

    def by_reviewer(self, participant_id: int) -> List[ResponseMap]:
        return self.find(scopes.by_reviewer(participant_id))

    def for_assignment(self, assignment_id: int) -> List[ResponseMap]:
        return self.find(scopes.for_assignment(assignment_id))

    def with_responses(self) -> List[ResponseMap]:
        return self.find(scopes.with_responses())

    def with_submitted_responses(self) -> List[ResponseMap]:
        return self.find(scopes.with_submitted_responses())

    def _normalize(self, fields: Dict) -> Dict:
        fields = dict(fields)
        if isinstance(fields.get('map_type'), str):
            fields['map_type'] = MapType(fields['map_type'])
        elif 'map_type' in fields and fields['map_type'] is None:
            fields['map_type'] = MapType.TEAMMATE_REVIEW
        elif 'map_type' in fields and not isinstance(fields['map_type'], MapType):
            raise ValueError(f"Invalid map_type: {fields['map_type']!r}")
        return fields

    def _check(self, db, attrs: Dict, exclude_id: Optional[int] = None):
        errors = validate_response_map(db, attrs, exclude_id)
        if errors:
            logger.warning(f"Rejected response map: {'; '.join(f'{e.field} {e.message}' for e in errors)}")
        raise_for(errors)

    def _flush(self, db):
        # A concurrent writer can insert the same triple after our check
        try:
            db.flush()
        except IntegrityError as e:
            if 'unique' not in str(e.orig).lower():
                raise
            logger.warning(f"Unique constraint rejected response map: {e.orig}")
            raise DuplicateMapping([duplicate_error()]) from e
