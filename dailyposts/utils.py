import datetime
import math


def calculate_reading_time(text: str, words_per_minute: int = 200) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / words_per_minute) or 1
    return f"{minutes} min read"


def parse_timestamp(value) -> datetime.datetime:
    """
    Parse a front-matter date into an aware datetime. YAML may already have
    produced a date or datetime; naive values are taken as UTC.
    Raises ValueError for anything that is not ISO-8601.
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time())
    elif isinstance(value, str):
        parsed = datetime.datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"not a timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def convert_date_to_string(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value
