"""
Validation error taxonomy for response maps and responses.

Every rejected write carries the list of field-level errors that caused it,
so callers can render a message next to the offending field.
"""

from typing import Dict, Iterable, List, NamedTuple


class FieldError(NamedTuple):
    field: str
    code: str
    message: str


class ValidationError(Exception):
    """Base class for rejected creates and updates"""

    code = 'invalid'

    def __init__(self, errors: Iterable[FieldError]):
        self.errors = list(errors)
        super().__init__('; '.join(f"{e.field} {e.message}" for e in self.errors))

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def messages(self) -> Dict[str, List[str]]:
        """Group messages by field name"""
        grouped = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def to_dict(self) -> Dict:
        return {'error': self.code, 'fields': self.messages()}


class MissingField(ValidationError):
    """A required foreign key is absent"""

    code = 'missing_field'


class ForeignKeyInvalid(ValidationError):
    """A provided id does not resolve, or resolves to the wrong entity type"""

    code = 'foreign_key_invalid'


class DuplicateMapping(ValidationError):
    """The reviewer/reviewee/reviewed-object triple is already mapped"""

    code = 'duplicate_mapping'


ERROR_CLASSES = {
    cls.code: cls for cls in (MissingField, ForeignKeyInvalid, DuplicateMapping)
}


def raise_for(errors: List[FieldError]) -> None:
    """Raise the exception matching a non-empty validation result"""
    if not errors:
        return
    raise ERROR_CLASSES.get(errors[0].code, ValidationError)(errors)
