from flask import Blueprint, current_app, request, jsonify
from peermap.errors import ValidationError
from peermap.repositories import ResponseMapRepository, ResponseLedger
from peermap.routes.responses import serialize_response
from peermap.services import ResponseMapViews
from peermap.utils.logger import get_logger

bp = Blueprint('response_maps', __name__)
logger = get_logger(__name__)


def _database():
    return current_app.extensions['database']


def serialize_map(response_map):
    return {
        'id': response_map.id,
        'map_type': response_map.map_type.value,
        'assignment_id': response_map.assignment_id,
        'reviewer_id': response_map.reviewer_id,
        'reviewee_id': response_map.reviewee_id,
        'reviewed_object_id': response_map.reviewed_object_id,
        'created_at': response_map.created_at.isoformat() if response_map.created_at else None
    }


def _map_list(response_maps):
    return jsonify({
        'response_maps': [serialize_map(m) for m in response_maps],
        'count': len(response_maps)
    }), 200


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@bp.route('', methods=['POST'])
def create_response_map():
    """Create a response map"""
    try:
        data = _json_body()
        if data is None:
            return jsonify({'error': 'JSON object body required'}), 400

        response_map = ResponseMapRepository(_database()).create(
            assignment_id=data.get('assignment_id'),
            reviewer_id=data.get('reviewer_id'),
            reviewee_id=data.get('reviewee_id'),
            reviewed_object_id=data.get('reviewed_object_id'),
            map_type=data.get('map_type')
        )
        return jsonify(serialize_map(response_map)), 201

    except ValidationError as e:
        return jsonify(e.to_dict()), 422
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating response map: {str(e)}")
        return jsonify({'error': 'Failed to create response map'}), 500


@bp.route('/<int:map_id>', methods=['GET'])
def get_response_map(map_id):
    """Get response map details"""
    try:
        response_map = ResponseMapRepository(_database()).get(map_id)
        if not response_map:
            return jsonify({'error': 'Response map not found'}), 404

        return jsonify(serialize_map(response_map)), 200

    except Exception as e:
        logger.error(f"Error getting response map {map_id}: {str(e)}")
        return jsonify({'error': 'Failed to get response map'}), 500


@bp.route('/<int:map_id>', methods=['PATCH'])
def update_response_map(map_id):
    """Reassign a response map"""
    try:
        data = _json_body()
        if data is None:
            return jsonify({'error': 'JSON object body required'}), 400

        response_map = ResponseMapRepository(_database()).update(map_id, **data)
        if not response_map:
            return jsonify({'error': 'Response map not found'}), 404

        return jsonify(serialize_map(response_map)), 200

    except ValidationError as e:
        return jsonify(e.to_dict()), 422
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating response map {map_id}: {str(e)}")
        return jsonify({'error': 'Failed to update response map'}), 500


@bp.route('/<int:map_id>', methods=['DELETE'])
def delete_response_map(map_id):
    """Delete a response map and its responses"""
    try:
        if not ResponseMapRepository(_database()).delete(map_id):
            return jsonify({'error': 'Response map not found'}), 404

        return jsonify({'message': 'Response map deleted'}), 200

    except Exception as e:
        logger.error(f"Error deleting response map {map_id}: {str(e)}")
        return jsonify({'error': 'Failed to delete response map'}), 500


@bp.route('/team/<int:participant_id>', methods=['GET'])
def maps_for_team(participant_id):
    """Response maps reviewing the participant's team"""
    try:
        return _map_list(ResponseMapViews(_database()).for_team(participant_id))

    except Exception as e:
        logger.error(f"Error listing team response maps: {str(e)}")
        return jsonify({'error': 'Failed to list response maps'}), 500


@bp.route('/reviewer/<int:participant_id>', methods=['GET'])
def maps_by_reviewer(participant_id):
    """Response maps the participant has to review"""
    try:
        assignment_id = request.args.get('assignment_id', type=int)
        return _map_list(ResponseMapViews(_database()).by_reviewer(participant_id, assignment_id))

    except Exception as e:
        logger.error(f"Error listing reviewer response maps: {str(e)}")
        return jsonify({'error': 'Failed to list response maps'}), 500


@bp.route('/assignment/<int:assignment_id>', methods=['GET'])
def maps_for_assignment(assignment_id):
    try:
        return _map_list(ResponseMapViews(_database()).for_assignment(assignment_id))

    except Exception as e:
        logger.error(f"Error listing assignment response maps: {str(e)}")
        return jsonify({'error': 'Failed to list response maps'}), 500


@bp.route('/with_responses', methods=['GET'])
def maps_with_responses():
    """Response maps with any response, or with a submitted one when submitted=true"""
    try:
        submitted_only = request.args.get('submitted', 'false').lower() == 'true'
        return _map_list(ResponseMapViews(_database()).with_responses(submitted_only))

    except Exception as e:
        logger.error(f"Error listing response maps with responses: {str(e)}")
        return jsonify({'error': 'Failed to list response maps'}), 500


@bp.route('/<int:map_id>/responses', methods=['POST'])
def record_response(map_id):
    """Save a draft or submitted response for a response map"""
    try:
        data = _json_body() if request.get_data() else {}
        if data is None:
            return jsonify({'error': 'JSON object body required'}), 400

        is_submitted = data.get('is_submitted', False)
        if not isinstance(is_submitted, bool):
            return jsonify({'error': 'is_submitted must be true or false'}), 400

        review_round = data.get('round', 1)
        if isinstance(review_round, bool) or not isinstance(review_round, int) or review_round < 1:
            return jsonify({'error': 'round must be a positive integer'}), 400

        response = ResponseLedger(_database()).record(
            map_id,
            is_submitted=is_submitted,
            review_round=review_round,
            additional_comment=data.get('additional_comment')
        )
        return jsonify(serialize_response(response)), 201

    except ValidationError as e:
        return jsonify(e.to_dict()), 422
    except Exception as e:
        logger.error(f"Error recording response for map {map_id}: {str(e)}")
        return jsonify({'error': 'Failed to record response'}), 500


@bp.route('/<int:map_id>/responses', methods=['GET'])
def list_responses(map_id):
    try:
        responses = ResponseLedger(_database()).list_by_map(map_id)
        return jsonify({
            'responses': [serialize_response(r) for r in responses],
            'count': len(responses)
        }), 200

    except Exception as e:
        logger.error(f"Error listing responses for map {map_id}: {str(e)}")
        return jsonify({'error': 'Failed to list responses'}), 500
