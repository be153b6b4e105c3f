"""Per-record category predicates.

Each predicate looks at a single ServerRecord and nothing else. A record can
match any subset of the categories.
"""

from .models.report_config import ModesConfig
from .models.server import ServerRecord

NON_NORMAL = "non_normal"
MAINTENANCE = "maintenance"
NON_INCOME = "non_income"
FREEZE_ENV_EMPTY = "freeze_env_empty"

_DEFAULT_MODES = ModesConfig()


def is_non_normal(record: ServerRecord, modes: ModesConfig = _DEFAULT_MODES) -> bool:
    return record.mode != modes.normal


def is_maintenance(record: ServerRecord, modes: ModesConfig = _DEFAULT_MODES) -> bool:
    return record.mode == modes.maintenance


def is_non_income(record: ServerRecord, modes: ModesConfig = _DEFAULT_MODES) -> bool:
    """A server cannot generate income when it has no VMs outside normal mode,
    or when its mode is one of the non-income modes (VMs or not).
    """
    no_vms_off_normal = record.vms == "" and record.mode != modes.normal
    return no_vms_off_normal or record.mode in modes.non_income


def is_freeze_env_empty(record: ServerRecord, modes: ModesConfig = _DEFAULT_MODES) -> bool:
    return record.mode == modes.freeze_env and record.vms == ""


_PREDICATES = (
    (NON_NORMAL, is_non_normal),
    (MAINTENANCE, is_maintenance),
    (NON_INCOME, is_non_income),
    (FREEZE_ENV_EMPTY, is_freeze_env_empty),
)


def classify(record: ServerRecord, modes: ModesConfig = _DEFAULT_MODES) -> frozenset[str]:
    """Return the set of categories *record* belongs to."""
    return frozenset(name for name, predicate in _PREDICATES if predicate(record, modes))
