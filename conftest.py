"""Configure test environment."""

import os
import sys
from pathlib import Path

# Add the project root to the Python path
project_dir = Path(__file__).parent
sys.path.insert(0, str(project_dir))

# Set testing flag
os.environ.setdefault("APP_ENVIRONMENT", "test")
