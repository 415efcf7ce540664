from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .attendance.aggregator import AttendanceAggregator
from .attendance.document_repository import DocumentAttendanceRepository
from .attendance.service import ClockService
from .cache.cached_store import CachedDocumentStore
from .cache.ttl_cache import TTLCache
from .campaigns.service import CampaignService
from .core.constants import DEFAULT_CACHE_TTL_SECONDS, DEFAULT_LATE_THRESHOLD_MINUTES, DEFAULT_SHIFT_START
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_store import MySQLDocumentStore
from .database.store import DocumentStore
from .reports.service import ReportService
from .shifts.model import ShiftPolicy
from .users.document_user_repository import DocumentUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    cache: TTLCache

    attendance_repo: DocumentAttendanceRepository
    users_repo: DocumentUserRepository

    aggregator: AttendanceAggregator
    auth_service: AuthService
    user_service: UserService
    campaign_service: CampaignService
    clock_service: ClockService
    report_service: ReportService


def _setting(settings: ModuleType | Any, name: str, default: Any) -> Any:
    return getattr(settings, name, default)


def build_container(settings: ModuleType | Any, *, store: Optional[DocumentStore] = None) -> Container:
    """Wire repositories and services from a settings module.

    ``store`` replaces the configured backend (tests pass an in-memory store).
    """
    if store is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(_setting(settings, "DB_CONFIG", {})))
        store = MySQLDocumentStore(conn)

    cache = TTLCache(float(_setting(settings, "CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS)))
    cached = CachedDocumentStore(store, cache)

    tz_name = str(_setting(settings, "REPORT_TIMEZONE", "") or "").strip()
    aggregator = AttendanceAggregator(
        shift=ShiftPolicy.from_settings(
            _setting(settings, "SHIFT_START", DEFAULT_SHIFT_START),
            _setting(settings, "LATE_THRESHOLD_MINUTES", DEFAULT_LATE_THRESHOLD_MINUTES),
        ),
        tz=ZoneInfo(tz_name) if tz_name else None,
    )

    attendance_repo = DocumentAttendanceRepository(cached)
    users_repo = DocumentUserRepository(cached)
    campaign_service = CampaignService(cached)

    return Container(
        store=cached,
        cache=cache,
        attendance_repo=attendance_repo,
        users_repo=users_repo,
        aggregator=aggregator,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        campaign_service=campaign_service,
        clock_service=ClockService(attendance_repo, users_repo),
        report_service=ReportService(attendance_repo, campaign_service, users_repo, aggregator=aggregator),
    )
