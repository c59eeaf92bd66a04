import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.orm import Session
from app.database import SessionLocal
from app.models import User

TEST_USERS = [
    {"name": "Sam Student", "email": "student@test.com", "user_type": "student"},
    {"name": "Casey Counselor", "email": "counselor@test.com", "user_type": "counselor"},
    {"name": "Alex Admin", "email": "admin@test.com", "user_type": "admin"},
]

def setup_test_data():
    """Create one user per role for trying the mood and crisis alert endpoints"""
    db: Session = SessionLocal()

    try:
        for data in TEST_USERS:
            existing = db.query(User).filter(User.email == data["email"]).first()
            if existing:
                print(f"User {data['name']} already exists: {existing.user_id}")
                continue

            user = User(status=1, **data)
            db.add(user)
            db.flush()
            print(f"Created {data['user_type']}: {data['name']} ({user.user_id})")

        db.commit()
        print("\n=== TEST USERS READY ===")
        print("Mint a token with: python generate_token.py <user_id> <user_type>")

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    setup_test_data()
