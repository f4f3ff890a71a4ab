"""
Configuration constants for the Doubles Court Scheduling System.
All configurable settings are defined here.
"""

from datetime import time
import os
import json
from dotenv import load_dotenv
from google.oauth2.service_account import Credentials

# Load environment variables from .env file
load_dotenv()

# Google Sheets Configuration
SPREADSHEET_ID = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", "")

# Credentials configuration
# Priority: GOOGLE_SERVICE_ACCOUNT_JSON / GOOGLE_SHEETS_CREDENTIALS_JSON > GOOGLE_SHEETS_CREDENTIALS_FILE > default file path
CREDENTIALS_FILE = os.getenv(
    "GOOGLE_SHEETS_CREDENTIALS_FILE",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "credentials", "service_account.json")
)
CREDENTIALS_JSON = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON") or os.getenv("GOOGLE_SHEETS_CREDENTIALS_JSON")

SHEETS_SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive'
]


def get_google_credentials() -> Credentials:
    """
    Get Google Sheets API credentials from environment variables or file.
    
    Priority:
    1. GOOGLE_SERVICE_ACCOUNT_JSON or GOOGLE_SHEETS_CREDENTIALS_JSON (JSON string)
    2. GOOGLE_SHEETS_CREDENTIALS_FILE (environment variable with file path)
    3. Default file path
    
    Returns:
        Credentials object for Google Sheets API access
        
    Raises:
        ValueError: If no valid credentials are found
    """
    if CREDENTIALS_JSON:
        try:
            creds_dict = json.loads(CREDENTIALS_JSON)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in service account credentials: {e}")
        # Keys pasted into env vars often carry literal "\n" sequences
        key = str(creds_dict.get("private_key", ""))
        creds_dict["private_key"] = key.replace("\\r\\n", "\n").replace("\\n", "\n")
        return Credentials.from_service_account_info(creds_dict, scopes=SHEETS_SCOPES)
    
    if CREDENTIALS_FILE and os.path.exists(CREDENTIALS_FILE):
        return Credentials.from_service_account_file(CREDENTIALS_FILE, scopes=SHEETS_SCOPES)
    
    raise ValueError(
        "Google Sheets credentials not found. Please set either:\n"
        "  - GOOGLE_SERVICE_ACCOUNT_JSON (recommended): JSON string in environment variable\n"
        "  - GOOGLE_SHEETS_CREDENTIALS_FILE: Path to credentials JSON file\n"
        "  - Or place credentials file at default location"
    )

# Sheet Names
ROSTER_SHEET_NAME = os.getenv("ROSTER_SHEET_NAME", "Roster")
ROSTER_RANGE = os.getenv("GOOGLE_SHEETS_RANGE", "")  # empty = whole roster sheet
RESULTS_SHEET_NAME = os.getenv("RESULTS_SHEET_NAME", "Results")
SCHEDULE_SHEET_PREFIX = "Schedule"

# Session defaults
DEFAULT_COURTS = 2
DEFAULT_SLOT_MINUTES_LONG = 12     # games to 21
DEFAULT_SLOT_MINUTES_SHORT = 8     # games to 15
DEFAULT_SHORT_MATCH_THRESHOLD = 7  # short format when players > courts * threshold
DEFAULT_START_TIME = time(10, 10)
DEFAULT_END_TIME = time(12, 0)

# Fairness limits (hard, relaxed only when nothing else fits)
DEFAULT_MAX_SAME_TEAMMATE = 1
DEFAULT_MAX_SAME_OPPONENT = 2
DEFAULT_MAX_CONSECUTIVE_PLAYS = 2

# Mixed-pairing policy
DEFAULT_STRONG_FEMALE_AS_MALE = True
DEFAULT_STRONG_LEVEL_THRESHOLD = 7

# Officiating
DEFAULT_OFFICIALS_PER_COURT = 3  # umpire + 2 line judges
OFFICIAL_ROLES = ("umpire", "line1", "line2")

# Player levels
DEFAULT_PLAYER_LEVEL = 1
LEVEL_RANGES = (8, 12)
DEFAULT_MAX_LEVEL = 8

# Search bounds
CANDIDATE_POOL_LIMIT = 8     # players considered per court
MAX_OFFICIAL_GROUPS = 6      # officiating groups tried per team split
TIE_BREAK_JITTER = 0.01      # width of the random tie-break band

# Seed = reroll + roster_size * SEED_PLAYER_FACTOR + courts * SEED_COURT_FACTOR
SEED_PLAYER_FACTOR = 97
SEED_COURT_FACTOR = 131

# Match cost weights (lower total cost is better)
COST_WEIGHTS = {
    "partner_overflow": 50,
    "opponent_overflow": 50,
    "consecutive_overflow": 30,
    "mixed_bonus": -5,
    "play_load": 1,
    "officiating_load": 0.5,
    "skill_balance": 0.2,
}

# Team-split pre-ranking (applied before officials are attached)
PAIRING_WEIGHTS = {
    "mixed_team": -2,
    "repeat_partner": 1,
    "repeat_opponent": 1,
}
