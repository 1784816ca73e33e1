"""
LeadCapture Configuration
=========================

Loads settings for the lead-capture form from environment variables.

Environment variables should be set in .env file in project root.
"""

import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


# ============================================================
# Supabase (Edge Functions + leads table)
# ============================================================
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")  # The form runs with client privileges

LEADS_TABLE = os.getenv("LEADS_TABLE", "leads")
CONFIRMATION_FUNCTION = os.getenv("CONFIRMATION_FUNCTION", "send-confirmation")

# ============================================================
# Submission Guard
# ============================================================
SUBMISSION_COOLDOWN_SECONDS = float(os.getenv("SUBMISSION_COOLDOWN_SECONDS", "3"))
SUBMIT_SETTLE_DELAY_SECONDS = float(os.getenv("SUBMIT_SETTLE_DELAY_SECONDS", "0.1"))

# Unset = request ids are remembered until the guard is reset
REQUEST_ID_TTL_SECONDS = _optional_float("REQUEST_ID_TTL_SECONDS")

# ============================================================
# Logging
# ============================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# ============================================================
# Configuration Validation
# ============================================================

def missing_settings() -> List[str]:
    """Names of required settings that are not configured."""
    missing = []
    if not SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not SUPABASE_ANON_KEY:
        missing.append("SUPABASE_ANON_KEY")
    return missing


def validate_config():
    """
    Validates that all required configuration is present.
    Called before the first remote call is made.
    """
    errors = [f"{name} is not set" for name in missing_settings()]

    if SUBMISSION_COOLDOWN_SECONDS < 0:
        errors.append("SUBMISSION_COOLDOWN_SECONDS must be >= 0")
    if SUBMIT_SETTLE_DELAY_SECONDS < 0:
        errors.append("SUBMIT_SETTLE_DELAY_SECONDS must be >= 0")

    if errors:
        raise ValueError(f"Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

    return True


def print_config_summary():
    """
    Prints a summary of the configuration (for debugging).
    NEVER prints secrets!
    """
    print("=" * 60)
    print("LeadCapture Configuration Summary")
    print("=" * 60)
    print(f"Supabase URL: {SUPABASE_URL}")
    print(f"Supabase anon key: {'set' if SUPABASE_ANON_KEY else 'NOT SET'}")
    print(f"Leads table: {LEADS_TABLE}")
    print(f"Confirmation function: {CONFIRMATION_FUNCTION}")
    print(f"Submission cooldown: {SUBMISSION_COOLDOWN_SECONDS}s")
    print(f"Settle delay: {SUBMIT_SETTLE_DELAY_SECONDS}s")
    print(f"Request id TTL: {REQUEST_ID_TTL_SECONDS or 'session (never evicted)'}")
    print(f"Log level: {LOG_LEVEL}")
    print("=" * 60)
