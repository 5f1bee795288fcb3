import os
import sys
import tempfile
from pathlib import Path

root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

# Settings are read once at import time, so the test database has to be
# configured before anything from carwash is imported.
_db_dir = tempfile.mkdtemp(prefix="carwash-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'test.db'}"
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["AUTO_RUN_MIGRATIONS"] = "1"
os.environ["SEED_SAMPLE_DATA"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)
