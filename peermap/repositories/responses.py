from datetime import datetime
from typing import List, Optional
from peermap.errors import raise_for
from peermap.models import Response
from peermap.utils.logger import get_logger
from peermap.utils.validators import validate_response

logger = get_logger(__name__)


class ResponseLedger:
    """Draft and submitted responses attached to response maps.

    A response starts as a draft or is recorded already submitted. The only
    transition is draft -> submitted.
    """

    def __init__(self, database):
        self.database = database

    def record(self, map_id: int, is_submitted: bool = False, review_round: int = 1,
               additional_comment: Optional[str] = None) -> Response:
        with self.database.get_db() as db:
            errors = validate_response(db, {'map_id': map_id})
            if errors:
                logger.warning(f"Rejected response for map {map_id!r}: {errors[0].message}")
            raise_for(errors)

            response = Response(
                map_id=map_id,
                is_submitted=bool(is_submitted),
                round=review_round,
                additional_comment=additional_comment,
                submitted_at=datetime.utcnow() if is_submitted else None
            )
            db.add(response)
            db.flush()

            logger.info(f"Recorded {response.status.value} response {response.id} for map {map_id}")
            return response

    def get(self, response_id: int) -> Optional[Response]:
        with self.database.get_db() as db:
            return db.get(Response, response_id)

    def mark_submitted(self, response_id: int) -> Optional[Response]:
        """Submit a draft; already submitted responses are left untouched"""
        with self.database.get_db() as db:
            response = db.get(Response, response_id)
            if not response:
                return None

            if not response.is_submitted:
                response.is_submitted = True
                response.submitted_at = datetime.utcnow()
                db.flush()
                logger.info(f"Response {response_id} submitted")

            return response

    def list_by_map(self, map_id: int) -> List[Response]:
        with self.database.get_db() as db:
            return db.query(Response).filter(Response.map_id == map_id).order_by(Response.id).all()
