"""
Database setup script
Creates the question store tables
Run this once against a fresh database
"""

from dotenv import load_dotenv
load_dotenv()

from database.database import engine, Base
from database.models import Topic, Part, Slot, Question  # noqa: F401

def create_tables():
    """Create all tables in the database"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")
    print("\nCreated tables:")
    print("  - topics, parts, slots")
    print("  - questions_topic_wise")

if __name__ == "__main__":
    create_tables()
