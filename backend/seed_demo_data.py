"""
Demo data seeder for the admin panel.

Run after init_admin.py:
    python seed_demo_data.py

Creates:
  - 10 chat users (password: user123456)
  - private rooms, 2 groups and 1 channel
  - 5-15 messages per room spread over the last 7 days
  - a few media files and user reports

Refuses to run when the database already holds 5 or more users.
"""
import random
import sys
from datetime import timedelta

from sqlalchemy import func

from admin_panel.config import settings
from admin_panel.database import Database
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import REPORT_REASONS, Report
from admin_panel.models.room import Room
from admin_panel.models.user import User
from admin_panel.utils.auth import hash_password
from admin_panel.utils.time import utcnow

DEMO_PASSWORD = "user123456"
MAX_EXISTING_USERS = 5

DEMO_USERS = [
    {"name": "Ahmed", "last_name": "Mohammed", "username": "ahmed_m", "phone": "+966501234567",
     "biography": "Software developer", "status": "online"},
    {"name": "Fatima", "last_name": "Ali", "username": "fatima_a", "phone": "+966502345678",
     "biography": "Graphic designer", "status": "online"},
    {"name": "Khaled", "last_name": "Saeed", "username": "khaled_s", "phone": "+966503456789",
     "biography": "Entrepreneur", "status": "offline"},
    {"name": "Noura", "last_name": "Abdullah", "username": "noura_a", "phone": "+966504567890",
     "biography": "Writer and blogger", "status": "online"},
    {"name": "Omar", "last_name": "Hassan", "username": "omar_h", "phone": "+966505678901",
     "biography": "Architect", "status": "offline"},
    {"name": "Sara", "last_name": "Ahmed", "username": "sara_a", "phone": "+966506789012",
     "biography": "Doctor", "status": "online"},
    {"name": "Mohammed", "last_name": "Khaled", "username": "mohammed_k", "phone": "+966507890123",
     "biography": "Math tutor", "status": "online"},
    {"name": "Mariam", "last_name": "Youssef", "username": "mariam_y", "phone": "+966508901234",
     "biography": "Lawyer", "status": "offline"},
    {"name": "Youssef", "last_name": "Ibrahim", "username": "youssef_i", "phone": "+966509012345",
     "biography": "Data analyst", "status": "online"},
    {"name": "Layla", "last_name": "Mahmoud", "username": "layla_m", "phone": "+966500123456",
     "biography": "Pharmacist", "status": "offline"},
]

MESSAGE_TEXTS = [
    "Hi! How are you?",
    "Fine, thanks",
    "Did you see the latest news?",
    "Yes, it was interesting",
    "What do you think about it?",
    "Can we meet tomorrow?",
    "Sure, what time?",
    "Three o'clock works?",
    "See you tomorrow!",
    "Thanks for the help",
    "Working on a new project",
    "Sounds exciting!",
]

MEDIA_FILES = [
    ("holiday.jpg", "image/jpeg", 2 * 1024 * 1024),
    ("report.pdf", "application/pdf", 512 * 1024),
    ("voice-note.ogg", "audio/ogg", 300 * 1024),
    ("clip.mp4", "video/mp4", 12 * 1024 * 1024),
]


def _random_past(days: int = 7):
    return utcnow() - timedelta(seconds=random.randint(0, days * 24 * 60 * 60))


def create_users(session):
    print("Creating demo users...")
    password_hash = hash_password(DEMO_PASSWORD)
    users = []
    for data in DEMO_USERS:
        user = User(password_hash=password_hash, created_at=_random_past(14), **data)
        session.add(user)
        users.append(user)
        print(f"  ✓ {data['username']}")
    session.flush()
    return users


def create_rooms(session, users):
    print("\nCreating demo rooms...")
    rooms = []
    for first, second in zip(users[0::2], users[1::2]):
        rooms.append(Room(type="private", name=f"{first.name} & {second.name}", participants=[first, second]))

    rooms.append(Room(
        type="group",
        name="Tech Group",
        description="Latest technology news",
        creator_id=users[0].id,
        participants=users[:5],
        admins=[users[0]],
        avatar="https://ui-avatars.com/api/?name=Tech+Group&background=4F46E5&color=fff",
    ))
    rooms.append(Room(
        type="group",
        name="Friends",
        description="General chat",
        creator_id=users[3].id,
        participants=users[3:8],
        admins=[users[3]],
        avatar="https://ui-avatars.com/api/?name=Friends&background=10B981&color=fff",
    ))
    rooms.append(Room(
        type="channel",
        name="News Channel",
        description="Announcements and updates",
        creator_id=users[0].id,
        participants=list(users),
        admins=[users[0]],
        avatar="https://ui-avatars.com/api/?name=News&background=F59E0B&color=fff",
    ))

    for room in rooms:
        session.add(room)
        print(f"  ✓ {room.type}: {room.name}")
    session.flush()
    return rooms


def create_messages(session, rooms):
    print("\nCreating demo messages...")
    count = 0
    for room in rooms:
        for _ in range(random.randint(5, 15)):
            created_at = _random_past()
            session.add(Message(
                sender_id=random.choice(room.participants).id,
                room_id=room.id,
                message=random.choice(MESSAGE_TEXTS),
                created_at=created_at,
                updated_at=created_at,
            ))
            count += 1
    print(f"  ✓ {count} messages")


def create_media(session, rooms):
    print("\nCreating demo media...")
    for filename, mimetype, size in MEDIA_FILES:
        room = random.choice(rooms)
        session.add(Media(
            sender_id=random.choice(room.participants).id,
            room_id=room.id,
            url=f"/uploads/{filename}",
            filename=filename,
            mimetype=mimetype,
            size=size,
            created_at=_random_past(),
        ))
    print(f"  ✓ {len(MEDIA_FILES)} media files")


def create_reports(session, users):
    print("\nCreating demo reports...")
    count = 0
    for i, reason in enumerate(REPORT_REASONS[:5]):
        reporter, reported = random.sample(users, 2)
        session.add(Report(
            reporter_id=reporter.id,
            target_type="user",
            target_id=reported.id,
            reason=reason,
            description=f"Demo report: {reason.replace('_', ' ')}",
            status="pending" if i % 2 == 0 else "resolved",
            created_at=_random_past(),
        ))
        count += 1
    print(f"  ✓ {count} reports")


def main():
    print("\n🌱 Seeding demo data for the admin panel...\n")
    database = Database.from_settings(settings)

    try:
        with database.session_scope() as session:
            existing = session.query(func.count(User.id)).scalar()
            if existing >= MAX_EXISTING_USERS:
                print(f"  ❌ Database already has {existing} users; refusing to seed demo data.")
                return 1

            users = create_users(session)
            rooms = create_rooms(session, users)
            create_messages(session, rooms)
            create_media(session, rooms)
            create_reports(session, users)
    finally:
        database.dispose()

    print("\n✅ Demo data created.")
    print(f"   Users log in with any demo username and password {DEMO_PASSWORD}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
