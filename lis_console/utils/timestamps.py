# lis_console/utils/timestamps.py

from datetime import UTC, date, datetime


def utc_now_iso() -> str:
    """
    현재 UTC 시각을 ISO-8601 문자열로 반환합니다. (예: "2024-01-15T09:30:00.000Z")
    REST API가 기대하는 createdAt/updatedAt 형식과 같습니다.
    """
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_iso() -> str:
    """오늘 날짜를 "YYYY-MM-DD" 형식으로 반환합니다."""
    return date.today().isoformat()
