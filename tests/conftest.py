"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at a throwaway SQLite database before anything imports settings.
"""

import os
import sys
import tempfile
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="coachdesk-media-")
os.environ["ADMIN_SIGNUP_CODE"] = "let-me-coach"
os.environ["JWT_SECRET"] = "test-secret"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
