#!/usr/bin/env python3
"""
Script to seed the database with a sample course for manual testing
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from werkzeug.security import generate_password_hash
from peermap.database import Database, DatabaseManager
from peermap.models import Role, User, Assignment, Team, Participant, MapType
from peermap.repositories import ResponseMapRepository, ResponseLedger
from peermap.utils.logger import setup_logger

logger = setup_logger('peermap.seed')

STUDENTS = [
    ('alice', 'Alice Anders'),
    ('bob', 'Bob Brown'),
    ('carol', 'Carol Chen'),
    ('dave', 'Dave Diaz'),
]


def create_course(database):
    """Create roles, an instructor, one assignment and two teams of students"""
    role_db = DatabaseManager(database, Role)
    user_db = DatabaseManager(database, User)
    assignment_db = DatabaseManager(database, Assignment)
    team_db = DatabaseManager(database, Team)
    participant_db = DatabaseManager(database, Participant)

    instructor_role = role_db.create(name='Instructor')
    participant_role = role_db.create(name='Participant')

    instructor = user_db.create(
        role_id=instructor_role.id,
        name='instructor',
        full_name='Ida Instructor',
        email='instructor@example.com',
        password_hash=generate_password_hash('password')
    )
    assignment = assignment_db.create(name='Design Document Review', instructor_id=instructor.id)

    teams = [
        team_db.create(assignment_id=assignment.id, name='Team Red'),
        team_db.create(assignment_id=assignment.id, name='Team Blue'),
    ]

    participants = []
    for index, (name, full_name) in enumerate(STUDENTS):
        user = user_db.create(
            role_id=participant_role.id,
            name=name,
            full_name=full_name,
            email=f'{name}@example.com',
            password_hash=generate_password_hash('password')
        )
        participants.append(participant_db.create(
            user_id=user.id,
            assignment_id=assignment.id,
            team_id=teams[index // 2].id
        ))

    return assignment, teams, participants


def create_reviews(database, assignment, teams, participants):
    """Every student reviews the other team's work"""
    map_repo = ResponseMapRepository(database)
    ledger = ResponseLedger(database)

    for participant in participants:
        other_team = teams[1] if participant.team_id == teams[0].id else teams[0]
        review_map = map_repo.create(
            assignment_id=assignment.id,
            reviewer_id=participant.id,
            reviewee_id=other_team.id,
            reviewed_object_id=assignment.id,
            map_type=MapType.PEER_REVIEW
        )
        ledger.record(review_map.id, is_submitted=participant.id % 2 == 0)


def main():
    database = Database()
    logger.info(f"Seeding database at {database.url}")

    database.drop_db()
    database.init_db()

    assignment, teams, participants = create_course(database)
    create_reviews(database, assignment, teams, participants)

    logger.info(f"Seeded assignment {assignment.id} with {len(participants)} participants")


if __name__ == '__main__':
    main()
