"""Shared fixtures: an isolated SQLite database and a small course."""

import pytest
from peermap.database import Database, DatabaseManager
from peermap.models import Role, User, Assignment, Team, Participant


@pytest.fixture
def database(tmp_path):
    """Fresh database file per test"""
    database = Database(f"sqlite:///{tmp_path / 'test_peermap.db'}")
    database.init_db()
    yield database
    database.drop_db()
    database.dispose()


@pytest.fixture
def course(database):
    """Instructor, assignment, one team and three participants.

    alice and bob are on the team, carol has no team.
    """
    role_db = DatabaseManager(database, Role)
    user_db = DatabaseManager(database, User)
    assignment_db = DatabaseManager(database, Assignment)
    team_db = DatabaseManager(database, Team)
    participant_db = DatabaseManager(database, Participant)

    role_instructor = role_db.create(name='Instructor')
    role_participant = role_db.create(name='Participant')

    instructor = user_db.create(
        role_id=role_instructor.id,
        name='Instructor Name',
        full_name='Full Instructor Name',
        email='instructor@example.com',
        password_hash='password'
    )
    assignment = assignment_db.create(name='Test Assignment', instructor_id=instructor.id)
    other_assignment = assignment_db.create(name='Other Assignment', instructor_id=instructor.id)
    team = team_db.create(assignment_id=assignment.id, name='Team One')

    participants = {}
    for name, team_id in (('alice', team.id), ('bob', team.id), ('carol', None)):
        user = user_db.create(
            role_id=role_participant.id,
            name=name,
            full_name=name.title(),
            email=f'{name}@example.com',
            password_hash='password'
        )
        participants[name] = participant_db.create(
            user_id=user.id,
            assignment_id=assignment.id,
            team_id=team_id
        )

    return {
        'instructor': instructor,
        'assignment': assignment,
        'other_assignment': other_assignment,
        'team': team,
        **participants
    }
