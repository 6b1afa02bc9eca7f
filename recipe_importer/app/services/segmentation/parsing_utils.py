"""Servings and duration parsing helpers."""

import re
from typing import Optional

SERVINGS_RE = re.compile(r"\b(serves?|servings?|yield)\D+(\d+)\b", re.I)
PREP_RE = re.compile(r"\b(?:prep|preparation)(?:\s+time)?\s*:\s*(\S.*?)(?=\s+\w+:|$)", re.I)
COOK_RE = re.compile(r"\bcook(?:\s+time)?\s*:\s*(\S.*?)(?=\s+\w+:|$)", re.I)
TOTAL_RE = re.compile(r"\btotal(?:\s+time)?\s*:\s*(\S.*?)(?=\s+\w+:|$)", re.I)


def extract_first_integer(text: str) -> str:
    match = re.search(r"\d+", text or "")
    return match.group() if match else ""


def parse_servings_from_text(text: str) -> str:
    """Return the count following a serves/servings/yield term, or ``""``."""
    if not text:
        return ""
    match = SERVINGS_RE.search(text)
    return match.group(2) if match else ""


def parse_duration_minutes(text: str) -> int:
    """Parse "2 HOURS 45 MINUTES" or "15 min" into minutes; missing parts count as 0."""
    minutes = 0
    hours_match = re.search(r"(\d+)\s*(?:hour|hr)", text or "", re.I)
    minutes_match = re.search(r"(\d+)\s*min", text or "", re.I)
    if hours_match:
        minutes += int(hours_match.group(1)) * 60
    if minutes_match:
        minutes += int(minutes_match.group(1))
    return minutes


def parse_labeled_duration(text: str, pattern: re.Pattern) -> Optional[int]:
    match = pattern.search(text or "")
    if not match:
        return None
    return parse_duration_minutes(match.group(1))


def parse_iso8601_duration(duration: str) -> Optional[int]:
    """Parse a minimal ISO-8601 duration string (e.g., PT1H30M) into minutes."""
    if not duration or not isinstance(duration, str):
        return None
    match = re.match(r"P(?:\d+D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?", duration.strip())
    if not match:
        return None
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    total_minutes = hours * 60 + minutes + (1 if seconds >= 30 else 0)
    return total_minutes or None


def parse_servings_value(value) -> str:
    """Parse servings from the loose shapes schema.org ``recipeYield`` takes."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(int(value))
    if isinstance(value, str):
        return extract_first_integer(value)
    if isinstance(value, list):
        for item in value:
            parsed = parse_servings_value(item)
            if parsed:
                return parsed
    return ""
