from hackathon_api.database import Base, engine, SessionLocal
from hackathon_api.errors import Conflict
from hackathon_api.services import validation_service
from hackathon_api.services.participant_store import ParticipantStore

DEMO_PARTICIPANTS = [
    {
        "full_name": "Aarav Sharma",
        "email": "aarav.sharma@example.com",
        "phone_number": "9876543210",
        "college_name": "National Institute of Technology",
        "degree": "B.Tech",
        "year_of_study": "3rd",
        "cgpa": "8.7",
        "tech_stack": ["AI/ML", "Web Development"],
        "other_skills": "Docker, FastAPI",
        "project_idea": "A campus lost-and-found board that matches reported items with photos using embeddings.",
        "github": "https://github.com/aarav-sharma",
    },
    {
        "full_name": "Meera Nair",
        "email": "meera.nair@example.com",
        "phone_number": "9123456780",
        "college_name": "State University",
        "degree": "MCA",
        "year_of_study": "1st",
        "cgpa": 9.1,
        "tech_stack": '["Cloud Computing", "DevOps"]',
        "linkedin": "https://www.linkedin.com/in/meera-nair",
    },
    {
        "full_name": "Kabir Singh",
        "email": "kabir.singh@example.com",
        "phone_number": "9988776655",
        "college_name": "City Engineering College",
        "degree": "BCA",
        "year_of_study": "2nd",
        "cgpa": "7.4",
        "tech_stack": ["IoT", "Mobile Development", "AR/VR"],
    },
]


def seed_participants(db):
    store = ParticipantStore(db)
    for raw in DEMO_PARTICIPANTS:
        result = validation_service.validate(raw)
        if not result.ok:
            print(f"❌ Skipping demo participant '{raw['email']}': {result.messages}")
            continue
        try:
            store.create(result.data)
        except Conflict:
            print(f"✔ Participant '{raw['email']}' already present, skipping.")
            continue
        print(f"✔ Seeded participant '{raw['email']}'")


def run_seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_participants(db)
    except Exception as e:
        db.rollback()
        print("❌ Seeding error:", e)
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
