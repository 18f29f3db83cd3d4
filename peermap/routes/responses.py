from flask import Blueprint, current_app, jsonify
from peermap.repositories import ResponseLedger
from peermap.utils.logger import get_logger

bp = Blueprint('responses', __name__)
logger = get_logger(__name__)


def _ledger():
    return ResponseLedger(current_app.extensions['database'])


def serialize_response(response):
    return {
        'id': response.id,
        'map_id': response.map_id,
        'is_submitted': response.is_submitted,
        'status': response.status.value,
        'round': response.round,
        'additional_comment': response.additional_comment,
        'submitted_at': response.submitted_at.isoformat() if response.submitted_at else None,
        'created_at': response.created_at.isoformat() if response.created_at else None
    }


@bp.route('/<int:response_id>', methods=['GET'])
def get_response(response_id):
    """Get a single response"""
    try:
        response = _ledger().get(response_id)
        if not response:
            return jsonify({'error': 'Response not found'}), 404

        return jsonify(serialize_response(response)), 200

    except Exception as e:
        logger.error(f"Error getting response {response_id}: {str(e)}")
        return jsonify({'error': 'Failed to get response'}), 500


@bp.route('/<int:response_id>/submit', methods=['POST'])
def submit_response(response_id):
    """Submit a draft response; submitting twice is a no-op"""
    try:
        response = _ledger().mark_submitted(response_id)
        if not response:
            return jsonify({'error': 'Response not found'}), 404

        return jsonify(serialize_response(response)), 200

    except Exception as e:
        logger.error(f"Error submitting response {response_id}: {str(e)}")
        return jsonify({'error': 'Failed to submit response'}), 500
