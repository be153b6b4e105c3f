"""Fold classified server records into per-location frequency tables."""

import functools
import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from .classification import FREEZE_ENV_EMPTY, MAINTENANCE, NON_INCOME, NON_NORMAL, classify
from .models.report_config import ModesConfig
from .models.server import ServerRecord

logger = logging.getLogger(__name__)

FlatCounts = dict[str, int]
NestedCounts = dict[str, dict[str, int]]


class FleetTables(BaseModel):
    """The six frequency tables of a fleet snapshot.

    Each nested table sums, per location, to its flat counterpart:
    ``non_normal_by_location_and_mode`` to ``non_normal_by_location`` and
    ``maintenance_by_location_and_type`` to ``maintenance_by_location``.
    """

    non_normal_by_location: FlatCounts = Field(default_factory=dict)
    non_normal_by_location_and_mode: NestedCounts = Field(default_factory=dict)
    maintenance_by_location: FlatCounts = Field(default_factory=dict)
    maintenance_by_location_and_type: NestedCounts = Field(default_factory=dict)
    non_income_by_location: FlatCounts = Field(default_factory=dict)
    freeze_env_by_location: FlatCounts = Field(default_factory=dict)


def _bump(counts: FlatCounts, key: str, amount: int = 1) -> None:
    counts[key] = counts.get(key, 0) + amount


def _bump_nested(flat: FlatCounts, nested: NestedCounts, key: str, sub_key: str, amount: int = 1) -> None:
    # Flat and nested counters always move together.
    _bump(flat, key, amount)
    _bump(nested.setdefault(key, {}), sub_key, amount)


def add_record(tables: FleetTables, record: ServerRecord, modes: ModesConfig | None = None) -> FleetTables:
    """Count *record* into *tables*. Returns the mutated *tables*."""
    categories = classify(record, modes or ModesConfig())
    location = record.location

    if NON_NORMAL in categories:
        _bump_nested(
            tables.non_normal_by_location, tables.non_normal_by_location_and_mode, location, record.mode
        )
    if MAINTENANCE in categories:
        _bump_nested(
            tables.maintenance_by_location, tables.maintenance_by_location_and_type, location, record.type
        )
    if NON_INCOME in categories:
        _bump(tables.non_income_by_location, location)
    if FREEZE_ENV_EMPTY in categories:
        _bump(tables.freeze_env_by_location, location)
    return tables


def aggregate(records: Iterable[ServerRecord], modes: ModesConfig | None = None) -> FleetTables:
    """Build fresh tables from a single pass over *records*."""
    modes = modes or ModesConfig()
    tables = functools.reduce(
        lambda acc, record: add_record(acc, record, modes),
        records,
        FleetTables(),
    )
    logger.debug(
        "Aggregated %d non-normal, %d maintenance, %d non-income, %d freeze-env server(s)",
        grand_total(tables.non_normal_by_location),
        grand_total(tables.maintenance_by_location),
        grand_total(tables.non_income_by_location),
        grand_total(tables.freeze_env_by_location),
    )
    return tables


def merge_tables(target: FleetTables, source: FleetTables) -> FleetTables:
    """Add every count of *source* into *target*. Returns the mutated *target*."""
    for location, count in source.non_income_by_location.items():
        _bump(target.non_income_by_location, location, count)
    for location, count in source.freeze_env_by_location.items():
        _bump(target.freeze_env_by_location, location, count)
    for location, by_mode in source.non_normal_by_location_and_mode.items():
        for mode, count in by_mode.items():
            _bump_nested(
                target.non_normal_by_location, target.non_normal_by_location_and_mode, location, mode, count
            )
    for location, by_type in source.maintenance_by_location_and_type.items():
        for type_name, count in by_type.items():
            _bump_nested(
                target.maintenance_by_location, target.maintenance_by_location_and_type, location, type_name, count
            )
    return target


def grand_total(counts: FlatCounts) -> int:
    return sum(counts.values())
