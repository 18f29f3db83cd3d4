import pytest
from peermap.main import create_app


@pytest.fixture
def client(database):
    app = create_app('testing', database=database)
    return app.test_client()


@pytest.fixture
def payload(course):
    return {
        'assignment_id': course['assignment'].id,
        'reviewer_id': course['alice'].id,
        'reviewee_id': course['bob'].id,
        'reviewed_object_id': course['assignment'].id
    }


def _create(client, payload):
    response = client.post('/api/response_maps', json=payload)
    assert response.status_code == 201
    return response.get_json()


class TestResponseMapRoutes:
    """CRUD endpoints"""

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}

    def test_create(self, client, payload):
        data = _create(client, payload)

        assert data['id'] is not None
        assert data['map_type'] == 'teammate_review'
        assert data['reviewer_id'] == payload['reviewer_id']

    def test_create_duplicate(self, client, payload):
        _create(client, payload)

        response = client.post('/api/response_maps', json=payload)
        assert response.status_code == 422
        assert response.get_json() == {
            'error': 'duplicate_mapping',
            'fields': {'reviewee_id': ['Duplicate response map is not allowed.']}
        }

    def test_create_missing_field(self, client, payload):
        del payload['reviewer_id']

        response = client.post('/api/response_maps', json=payload)
        assert response.status_code == 422
        assert response.get_json()['fields'] == {'reviewer_id': ["can't be blank"]}

    def test_create_invalid_reference(self, client, payload):
        payload['reviewee_id'] = 'invalid_id'

        response = client.post('/api/response_maps', json=payload)
        assert response.status_code == 422
        assert response.get_json()['error'] == 'foreign_key_invalid'

    def test_create_unknown_map_type(self, client, payload):
        payload['map_type'] = 'quiz'

        response = client.post('/api/response_maps', json=payload)
        assert response.status_code == 400

    def test_create_without_body(self, client):
        response = client.post('/api/response_maps', data='nope', content_type='text/plain')
        assert response.status_code == 400

    def test_get(self, client, payload):
        created = _create(client, payload)

        response = client.get(f"/api/response_maps/{created['id']}")
        assert response.status_code == 200
        assert response.get_json()['reviewee_id'] == payload['reviewee_id']

        assert client.get('/api/response_maps/999').status_code == 404

    def test_update(self, client, course, payload):
        created = _create(client, payload)

        response = client.patch(
            f"/api/response_maps/{created['id']}",
            json={'reviewee_id': course['carol'].id}
        )
        assert response.status_code == 200
        assert response.get_json()['reviewee_id'] == course['carol'].id

    def test_update_errors(self, client, payload):
        created = _create(client, payload)
        url = f"/api/response_maps/{created['id']}"

        assert client.patch(url, json={'reviewer_id': None}).status_code == 422
        assert client.patch(url, json={'score': 3}).status_code == 400
        assert client.patch('/api/response_maps/999', json={'reviewer_id': 1}).status_code == 404

    def test_delete(self, client, payload):
        created = _create(client, payload)
        url = f"/api/response_maps/{created['id']}"

        assert client.delete(url).status_code == 200
        assert client.get(url).status_code == 404
        assert client.delete(url).status_code == 404


class TestViewRoutes:
    """Read views and responses"""

    def test_views(self, client, course, payload):
        created = _create(client, payload)

        for url in (
            f"/api/response_maps/team/{course['alice'].id}",
            f"/api/response_maps/reviewer/{course['alice'].id}",
            f"/api/response_maps/reviewer/{course['alice'].id}?assignment_id={course['assignment'].id}",
            f"/api/response_maps/assignment/{course['assignment'].id}",
        ):
            data = client.get(url).get_json()
            assert [m['id'] for m in data['response_maps']] == [created['id']], url
            assert data['count'] == 1

        data = client.get(f"/api/response_maps/team/{course['carol'].id}").get_json()
        assert data['count'] == 0

    def test_responses_flow(self, client, payload):
        created = _create(client, payload)
        map_url = f"/api/response_maps/{created['id']}"

        assert client.get('/api/response_maps/with_responses').get_json()['count'] == 0

        response = client.post(f'{map_url}/responses', json={'additional_comment': 'Draft'})
        assert response.status_code == 201
        draft = response.get_json()
        assert draft['status'] == 'draft'

        assert client.get('/api/response_maps/with_responses').get_json()['count'] == 1
        assert client.get('/api/response_maps/with_responses?submitted=true').get_json()['count'] == 0

        response = client.post(f"/api/responses/{draft['id']}/submit")
        assert response.status_code == 200
        assert response.get_json()['status'] == 'submitted'
        assert client.get('/api/response_maps/with_responses?submitted=true').get_json()['count'] == 1

        listed = client.get(f'{map_url}/responses').get_json()
        assert [r['id'] for r in listed['responses']] == [draft['id']]
        assert client.get(f"/api/responses/{draft['id']}").status_code == 200

    def test_response_for_unknown_map(self, client, course):
        response = client.post('/api/response_maps/999/responses', json={'is_submitted': True})
        assert response.status_code == 422
        assert response.get_json()['error'] == 'foreign_key_invalid'

    def test_submit_unknown_response(self, client, course):
        assert client.post('/api/responses/999/submit').status_code == 404


class TestRequestBodies:
    """Malformed bodies are rejected before anything is written"""

    @pytest.mark.parametrize('body', [
        {'is_submitted': 'false'},
        {'is_submitted': 1},
        {'round': '2'},
        {'round': 0},
        {'round': True},
    ])
    def test_record_response_rejects_non_typed_values(self, client, payload, body):
        created = _create(client, payload)

        response = client.post(f"/api/response_maps/{created['id']}/responses", json=body)
        assert response.status_code == 400
        assert client.get(f"/api/response_maps/{created['id']}/responses").get_json()['count'] == 0
        assert client.get('/api/response_maps/with_responses?submitted=true').get_json()['count'] == 0

    def test_record_response_rejects_list_body(self, client, payload):
        created = _create(client, payload)

        response = client.post(f"/api/response_maps/{created['id']}/responses", json=[1])
        assert response.status_code == 400

    def test_record_response_without_body_is_draft(self, client, payload):
        created = _create(client, payload)

        response = client.post(f"/api/response_maps/{created['id']}/responses")
        assert response.status_code == 201
        assert response.get_json()['status'] == 'draft'
        assert response.get_json()['round'] == 1

    @pytest.mark.parametrize('map_type', [1, True, ['peer_review'], {'type': 'peer_review'}])
    def test_create_with_non_string_map_type(self, client, payload, map_type):
        payload['map_type'] = map_type

        response = client.post('/api/response_maps', json=payload)
        assert response.status_code == 400
        assert client.get(f"/api/response_maps/assignment/{payload['assignment_id']}").get_json()['count'] == 0

    def test_update_with_non_string_map_type(self, client, payload):
        created = _create(client, payload)

        response = client.patch(f"/api/response_maps/{created['id']}", json={'map_type': 1})
        assert response.status_code == 400
