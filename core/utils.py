"""Shared dataclasses, enums, formatting helpers, and platform-specific paths."""

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union


# --- Constants ---

APP_NAME = "RetinaScan"
APP_VERSION = "1.0.0"
SETTINGS_ORG = "RetinaScan"
SETTINGS_APP = "RetinaScan"

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

JPEG = "image/jpeg"
PNG = "image/png"
SUPPORTED_MEDIA_TYPES = {JPEG, PNG}
MEDIA_TYPE_ALIASES = {"image/jpg": JPEG, "image/pjpeg": JPEG, "image/x-png": PNG}
SUPPORTED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}


# --- Enums ---

class Severity(Enum):
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    PROLIFERATIVE = "proliferative"


class Urgency(Enum):
    ROUTINE = "routine"
    MODERATE = "moderate"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class Eye(Enum):
    LEFT = "left"
    RIGHT = "right"
    UNSET = ""

    @property
    def label(self) -> str:
        return {"left": "Left", "right": "Right"}.get(self.value, "")


# --- Dataclasses ---

@dataclass(frozen=True)
class UploadedImage:
    """A validated JPEG/PNG file ready for preview and transport."""
    file_name: str
    media_type: str
    size_bytes: int
    data_url: str
    width: int = 0
    height: int = 0


@dataclass
class PatientInfo:
    """Optional descriptive patient fields, passed through unmodified."""
    id: str = ""
    age: str = ""
    eye: Eye = Eye.UNSET

    def to_dict(self) -> dict:
        return {"id": self.id, "age": self.age, "eye": self.eye.value}


@dataclass(frozen=True)
class PredictionRequest:
    image: str
    patient_info: PatientInfo

    def to_payload(self) -> dict:
        return {"image": self.image, "patientInfo": self.patient_info.to_dict()}


@dataclass(frozen=True)
class PredictionResult:
    """Structured classification returned by the prediction service."""
    label: str
    confidence: float
    severity: Severity
    urgency: Urgency
    recommendation: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "class": self.label,
            "confidence": self.confidence,
            "severity": self.severity.value,
            "urgency": self.urgency.value,
            "recommendation": self.recommendation,
            "description": self.description,
        }


@dataclass(frozen=True)
class PredictionResponse:
    """Normalized service reply: either a prediction or an error message."""
    success: bool
    prediction: Optional[PredictionResult] = None
    timestamp: str = ""
    model_accuracy: Optional[float] = None
    error: str = ""

    @classmethod
    def failure(cls, message: str) -> "PredictionResponse":
        return cls(success=False, error=message)


Number = Union[int, float]
StateCallback = Callable[[object], None]
ProgressCallback = Callable[[int, int, str], None]  # (step, total, message)


# --- Formatting ---

def format_file_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def format_percent(value: Number) -> str:
    """Format a 0-100 figure the way the service supplies it: 94 -> "94", 91.8 -> "91.8"."""
    rounded = round(float(value), 1)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.1f}"


def parse_timestamp(timestamp: str) -> datetime:
    """Parse an ISO-8601 timestamp into local time.

    Naive timestamps are taken as local already. A trailing "Z" is accepted.
    """
    text = timestamp.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(moment: datetime) -> str:
    """Short date, e.g. 3/7/2025."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: datetime) -> str:
    """Clock time with seconds, e.g. 2:05:09 PM."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


# --- Platform-specific paths ---

def get_data_dir() -> Path:
    """Get the platform-specific application data directory."""
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support" / APP_NAME
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home())) / APP_NAME
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "retinascan"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_log_dir() -> Path:
    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_asset_path(relative_path: str) -> str:
    """Get absolute path to an asset file, handling PyInstaller frozen apps."""
    if getattr(sys, "frozen", False):
        base = Path(sys._MEIPASS)
    else:
        base = Path(__file__).parent.parent
    return str(base / relative_path)
