"""Fleet status report view-model builder.

The view is a plain dict so the same structure feeds the text template and
the YAML/JSON dumps.
"""

from typing import Any

from ..aggregation import FleetTables, FlatCounts, NestedCounts, grand_total
from ..models.report_config import ModesConfig
from ..ranking import rank_counts, rank_nested

SECTION_KEYS = (
    "non_normal",
    "non_income",
    "freeze_env",
    "maintenance",
    "maintenance_by_type",
)


def _flat_section(key: str, title: str, subtitle: str, counts: FlatCounts) -> dict[str, Any]:
    return {
        "key": key,
        "title": title,
        "total": grand_total(counts),
        "subtitle": subtitle,
        "nested": False,
        "entries": [{"name": name, "count": count} for name, count in rank_counts(counts)],
    }


def _nested_section(key: str, title: str, subtitle: str, total: int, nested: NestedCounts) -> dict[str, Any]:
    entries = []
    for name, count, ranked in rank_nested(nested):
        entries.append({
            "name": name,
            "count": count,
            "breakdown": [{"name": sub, "count": sub_count} for sub, sub_count in ranked],
        })
    return {
        "key": key,
        "title": title,
        "total": total,
        "subtitle": subtitle,
        "nested": True,
        "entries": entries,
    }


def build_fleet_report_view(
    tables: FleetTables,
    modes: ModesConfig | None = None,
    *,
    record_count: int | None = None,
) -> dict[str, Any]:
    modes = modes or ModesConfig()
    maintenance = modes.maintenance

    sections = [
        _nested_section(
            "non_normal",
            "Total servers with non-normal mode",
            "Breakdown by location and mode:",
            grand_total(tables.non_normal_by_location),
            tables.non_normal_by_location_and_mode,
        ),
        _flat_section(
            "non_income",
            "Total Servers that CANNOT generate Income",
            "Breakdown by location:",
            tables.non_income_by_location,
        ),
        _flat_section(
            "freeze_env",
            f"Total servers in {modes.freeze_env} empty",
            "Breakdown by location:",
            tables.freeze_env_by_location,
        ),
        _flat_section(
            "maintenance",
            f"Total servers in {maintenance}",
            f"Servers in {maintenance} per location:",
            tables.maintenance_by_location,
        ),
        _nested_section(
            "maintenance_by_type",
            f"Total servers in {maintenance} by type",
            f"Servers in {maintenance} per location and type:",
            grand_total(tables.maintenance_by_location),
            tables.maintenance_by_location_and_type,
        ),
    ]

    return {
        "metadata": {"record_count": record_count},
        "sections": sections,
    }


def iter_breakdown_rows(view: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten a report view into one row per ranked (section, location, submetric)."""
    rows: list[dict[str, Any]] = []
    for section in view.get("sections", []):
        for entry in section["entries"]:
            if not section["nested"]:
                rows.append({"section": section["key"], "location": entry["name"], "submetric": "", "count": entry["count"]})
                continue
            for item in entry["breakdown"]:
                rows.append({
                    "section": section["key"],
                    "location": entry["name"],
                    "submetric": item["name"],
                    "count": item["count"],
                })
    return rows
