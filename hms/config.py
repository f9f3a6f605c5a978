import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Save file (SQLite), relative to the working directory unless absolute
DATA_FILE = Path(os.getenv("HMS_DATA_FILE", "hospital_data.sqlite"))

# Logging configuration
LOG_DIR = os.getenv("HMS_LOG_DIR", "logs")
LOG_FILE = "hms.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("HMS_LOG_LEVEL", "INFO").upper()
