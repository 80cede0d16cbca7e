"""Configuration module for the school resource directory.

This module provides centralized configuration management, including the
backend API location, HTTP settings, logging level, and the fixed category
tables used by the directory and the resource forms.
All runtime values can be overridden via environment variables.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- API Configuration ---

# Base URL of the school backend. Stored file paths returned by the backend
# are relative to this URL (e.g. "/uploads/notes.pdf").
API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3000").rstrip("/")

# Prefix under which the CRUD endpoints are mounted
API_PREFIX: str = os.getenv("API_PREFIX", "/api")

# HTTP timeout in seconds. Unset means requests wait until the call settles.
_API_TIMEOUT_STR: str = os.getenv("API_TIMEOUT", "")
API_TIMEOUT: Optional[float] = float(_API_TIMEOUT_STR) if _API_TIMEOUT_STR else None

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# --- Directory Grouping ---

# Category that holds every teacher account
STAFF_CATEGORY: str = "Teachers"

# Accordion order of the user directory. The staff category comes first,
# followed by the class levels in ascending order.
CLASS_CATEGORIES: List[str] = [
    STAFF_CATEGORY,
    "LKG",
    "UKG",
    "Class 1",
    "Class 2",
    "Class 3",
    "Class 4",
    "Class 5",
    "Class 6",
    "Class 7",
    "Class 8",
    "Class 9",
    "Class 10",
]

USER_ROLES: List[str] = ["student", "teacher"]

# --- Study Material Configuration ---

MATERIAL_TYPES: List[str] = [
    "Notes",
    "Presentation",
    "Video Lecture",
    "Worksheet",
    "Link",
    "Other",
]
DEFAULT_MATERIAL_TYPE: str = "Notes"

# Multipart field carrying newly uploaded content
MATERIAL_FILE_FIELD: str = "materialFile"

# Multipart field telling the backend to keep the previously stored file
EXISTING_FILE_FIELD: str = "existing_file_path"

# Label shown on the file button when nothing is attached or stored
NO_FILE_LABEL: str = "Select File"
