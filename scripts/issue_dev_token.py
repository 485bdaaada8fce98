"""
Issue an HS256 access token for local development

Usage:
    JWT_SECRET_KEY=... python -m scripts.issue_dev_token <uid> [email] [role]
"""

import sys
from datetime import timedelta

from app.utils.security import create_access_token

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    uid = sys.argv[1]
    email = sys.argv[2] if len(sys.argv) > 2 else None
    role = sys.argv[3] if len(sys.argv) > 3 else "user"
    print(create_access_token(uid, email=email, role=role, expires_delta=timedelta(hours=12)))
