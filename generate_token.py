import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.auth import create_access_token

# Usage: python generate_token.py <user_id> [student|counselor|admin]
user_id = sys.argv[1] if len(sys.argv) > 1 else "12345678-1234-1234-1234-123456789012"
user_type = sys.argv[2] if len(sys.argv) > 2 else "student"

token = create_access_token(user_id, user_type)

print("=" * 50)
print(f"JWT TOKEN FOR {user_type.upper()} {user_id}:")
print("=" * 50)
print(token)
print("=" * 50)
print("Use it as a Bearer token in the Authorization header")
