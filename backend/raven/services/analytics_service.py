# backend/raven/services/analytics_service.py
"""
Analytics Service for Raven

Aggregations behind the admin dashboard: user totals, signups over time,
which slot types instructors have configured, and profile completeness.
"""

from collections import defaultdict
from datetime import date, datetime, time
import logging
from typing import Any, Dict, Optional, Set

from sqlalchemy.orm import Session

from ..core.constants import PROFILE_STATUS_APPROVED, PROFILE_STATUS_LIVE, WEEKDAY_NAMES
from ..core.exceptions import NotFoundException
from ..domain.day_slots import FallbackDaySlot
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .catalog_service import CatalogService

logger = logging.getLogger(__name__)


def _date_range(dates: Set[date]) -> Optional[Dict[str, date]]:
    if not dates:
        return None
    ordered = sorted(dates)
    return {"earliest": ordered[0], "latest": ordered[-1]}


def _percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # Halves round up
    return int(part * 100 / whole + 0.5)


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class AnalyticsService(BaseService):
    def __init__(self, db: Session, catalog_service: Optional[CatalogService] = None):
        super().__init__(db)
        self.repository = RepositoryFactory.create_analytics_repository(db)
        self.catalog_service = catalog_service or CatalogService(db)

    @BaseService.measure_operation("get_overview")
    def get_overview(self) -> Dict[str, Any]:
        total_instructors = self.repository.count_instructors()
        total_customers = self.repository.count_customers()
        catalog = self.catalog_service.get_day_slot_catalog()

        slot_types_by_instructor: Dict[str, Set[int]] = defaultdict(set)
        used_slot_ids: Set[int] = set()
        for slot in self.repository.list_booking_slots():
            types = slot_types_by_instructor[slot.instructor_id]
            if slot.day_slot_id:
                types.add(slot.day_slot_id)
                used_slot_ids.add(slot.day_slot_id)

        instructors_with_availability = len(slot_types_by_instructor)
        average = (
            sum(len(types) for types in slot_types_by_instructor.values())
            / instructors_with_availability
            if instructors_with_availability
            else 0.0
        )

        return {
            "total_users": total_instructors + total_customers,
            "total_instructors": total_instructors,
            "total_customers": total_customers,
            "instructors_with_availability": instructors_with_availability,
            "average_slot_types_per_instructor": round(average, 1),
            "slot_types_used": [
                slot_type.name for slot_type in catalog if slot_type.id in used_slot_ids
            ],
        }

    @BaseService.measure_operation("get_signups")
    def get_signups(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Daily signup counts; the end date includes its whole day."""
        created_from = datetime.combine(start_date, time.min) if start_date else None
        created_to = datetime.combine(end_date, time(23, 59, 59)) if end_date else None

        counts: Dict[str, Dict[str, int]] = defaultdict(lambda: {"instructors": 0, "customers": 0})
        for created_at in self.repository.get_instructor_signup_times(
            PROFILE_STATUS_APPROVED, created_from, created_to
        ):
            counts[created_at.date().isoformat()]["instructors"] += 1
        for created_at in self.repository.get_customer_signup_times(created_from, created_to):
            counts[created_at.date().isoformat()]["customers"] += 1

        series = [
            {
                "date": day,
                "instructor_signups": entry["instructors"],
                "customer_signups": entry["customers"],
                "total_signups": entry["instructors"] + entry["customers"],
            }
            for day, entry in sorted(counts.items())
        ]

        if series:
            range_start, range_end = series[0]["date"], series[-1]["date"]
        else:
            range_start = start_date.isoformat() if start_date else ""
            range_end = end_date.isoformat() if end_date else ""

        return {"series": series, "date_range": {"start": range_start, "end": range_end}}

    @BaseService.measure_operation("get_instructors")
    def get_instructors(self) -> Dict[str, Any]:
        catalog = self.catalog_service.get_day_slot_catalog()
        instructors = self.repository.list_instructors()

        slot_ids_by_instructor: Dict[str, Set[int]] = defaultdict(set)
        dates_by_instructor: Dict[str, Set[date]] = defaultdict(set)
        for slot in self.repository.list_booking_slots():
            if slot.day_slot_id:
                slot_ids_by_instructor[slot.instructor_id].add(slot.day_slot_id)
            if slot.date:
                dates_by_instructor[slot.instructor_id].add(slot.date)

        def slot_label(slot_id: int) -> str:
            lookup = catalog.lookup(slot_id)
            if isinstance(lookup, FallbackDaySlot):
                return f"Unknown ({slot_id})"
            return lookup.name

        rows = []
        for instructor in instructors:
            slot_ids = slot_ids_by_instructor.get(instructor.id, set())
            rows.append(
                {
                    "id": instructor.id,
                    "name": instructor.full_name,
                    "slot_type_count": len(slot_ids),
                    "slot_types": sorted(slot_label(slot_id) for slot_id in slot_ids),
                    "date_range": (
                        _date_range(dates_by_instructor.get(instructor.id, set()))
                        if slot_ids
                        else None
                    ),
                }
            )
        rows.sort(key=lambda row: row["slot_type_count"], reverse=True)

        aggregate_slot_types = []
        for slot_type in catalog:
            names = [
                row["name"]
                for row in rows
                if slot_type.id in slot_ids_by_instructor.get(row["id"], set())
            ]
            if not names:
                continue
            aggregate_slot_types.append(
                {
                    "id": slot_type.id,
                    "name": slot_type.name,
                    "default_start_time": slot_type.default_start,
                    "default_end_time": slot_type.default_end,
                    "instructor_count": len(names),
                    "instructor_names": sorted(names),
                }
            )

        all_dates: Set[date] = set()
        for instructor_id, slot_ids in slot_ids_by_instructor.items():
            if slot_ids:
                all_dates |= dates_by_instructor.get(instructor_id, set())

        return {
            "instructors": rows,
            "summary": {
                "total_instructors_with_slot_types": sum(1 for row in rows if row["slot_type_count"]),
                "total_instructors": len(instructors),
            },
            "aggregate": {
                "slot_types": aggregate_slot_types,
                "date_range": _date_range(all_dates),
            },
        }

    @BaseService.measure_operation("get_instructor_slots")
    def get_instructor_slots(self, instructor_id: str) -> Dict[str, Any]:
        instructor = self.repository.get_by_id(instructor_id, load_relationships=False)
        if instructor is None:
            raise NotFoundException(
                "Instructor not found",
                code="INSTRUCTOR_NOT_FOUND",
                details={"instructor_id": instructor_id},
            )
        catalog = self.catalog_service.get_day_slot_catalog()

        per_type: Dict[int, Dict[str, Any]] = {}
        for slot in self.repository.list_booking_slots(instructor_id):
            if not slot.day_slot_id:
                continue
            entry = per_type.setdefault(
                slot.day_slot_id,
                {"start_time": None, "end_time": None, "weekdays": set(), "dates": set()},
            )
            if slot.weekday is not None:
                # 7 is an alias for Sunday
                entry["weekdays"].add(0 if slot.weekday == 7 else slot.weekday)
            if slot.date:
                entry["dates"].add(slot.date)
            # Latest configured times win
            if slot.slot_start_time:
                entry["start_time"] = slot.slot_start_time
            if slot.slot_end_time:
                entry["end_time"] = slot.slot_end_time

        slot_types = []
        all_dates: Set[date] = set()
        for slot_id in sorted(per_type):
            slot_type = catalog.get(slot_id)
            if slot_type is None:
                continue
            entry = per_type[slot_id]
            slot_types.append(
                {
                    "id": slot_id,
                    "name": slot_type.name,
                    "start_time": entry["start_time"] or slot_type.default_start,
                    "end_time": entry["end_time"] or slot_type.default_end,
                    "days_configured": [
                        WEEKDAY_NAMES.get(day, f"Day {day}") for day in sorted(entry["weekdays"])
                    ],
                }
            )
            all_dates |= entry["dates"]

        return {
            "instructor": {"id": instructor.id, "name": instructor.full_name},
            "slot_types": slot_types,
            "date_range": _date_range(all_dates),
        }

    @BaseService.measure_operation("get_profile_completeness")
    def get_profile_completeness(self) -> Dict[str, Any]:
        instructors = self.repository.list_instructors(profile_status=PROFILE_STATUS_LIVE)
        image_counts = self.repository.count_images_by_instructor()
        language_counts = self.repository.count_languages_by_user()

        details = [
            {
                "id": instructor.id,
                "name": instructor.full_name,
                "has_avatar": _has_text(instructor.avatar_url),
                "gallery_count": image_counts.get(instructor.id, 0),
                "language_count": language_counts.get(instructor.id, 0),
                "has_biography": _has_text(instructor.biography),
                "has_stripe_account": bool(instructor.stripe_connected_account_id),
            }
            for instructor in instructors
        ]

        total = len(details)
        summary = {
            "total_instructors": total,
            "with_avatar": sum(1 for d in details if d["has_avatar"]),
            "with_gallery": sum(1 for d in details if d["gallery_count"] > 0),
            "with_languages": sum(1 for d in details if d["language_count"] > 0),
            "with_biography": sum(1 for d in details if d["has_biography"]),
            "with_stripe_account": sum(1 for d in details if d["has_stripe_account"]),
        }
        percentages = {
            "avatar": _percentage(summary["with_avatar"], total),
            "gallery": _percentage(summary["with_gallery"], total),
            "languages": _percentage(summary["with_languages"], total),
            "biography": _percentage(summary["with_biography"], total),
            "stripe_account": _percentage(summary["with_stripe_account"], total),
        }
        return {"summary": summary, "percentages": percentages, "details": details}
