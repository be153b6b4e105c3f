import unittest

from fleet_stats.aggregation import aggregate
from fleet_stats.models.report_config import ModesConfig
from fleet_stats.models.server import ServerRecord
from fleet_stats.view_models.report import SECTION_KEYS, build_fleet_report_view, iter_breakdown_rows


def _scenario_view(**kwargs):
    servers = [
        ServerRecord(location="fra", mode="AGENT_MODE_MAINTENANCE", type="HW", vms=""),
        ServerRecord(location="fra", mode="AGENT_MODE_NORMAL", vms="1"),
        ServerRecord(location="ams", mode="AGENT_MODE_FREEZE_ENV", vms=""),
    ]
    return build_fleet_report_view(aggregate(servers), **kwargs)


def _sections(view):
    return {section["key"]: section for section in view["sections"]}


class FleetReportViewTests(unittest.TestCase):

    def test_section_order(self):
        view = _scenario_view()
        self.assertEqual(tuple(s["key"] for s in view["sections"]), SECTION_KEYS)

    def test_non_normal_section_is_nested_and_tie_broken(self):
        section = _sections(_scenario_view())["non_normal"]
        self.assertTrue(section["nested"])
        self.assertEqual(section["total"], 2)
        self.assertEqual(
            section["entries"],
            [
                {"name": "ams", "count": 1, "breakdown": [{"name": "AGENT_MODE_FREEZE_ENV", "count": 1}]},
                {"name": "fra", "count": 1, "breakdown": [{"name": "AGENT_MODE_MAINTENANCE", "count": 1}]},
            ],
        )

    def test_flat_sections(self):
        sections = _sections(_scenario_view())
        self.assertEqual(sections["non_income"]["total"], 2)
        self.assertEqual(
            sections["non_income"]["entries"],
            [{"name": "ams", "count": 1}, {"name": "fra", "count": 1}],
        )
        self.assertEqual(sections["freeze_env"]["entries"], [{"name": "ams", "count": 1}])
        self.assertEqual(sections["maintenance"]["entries"], [{"name": "fra", "count": 1}])
        self.assertFalse(sections["maintenance"]["nested"])

    def test_maintenance_by_type(self):
        section = _sections(_scenario_view())["maintenance_by_type"]
        self.assertEqual(section["total"], 1)
        self.assertEqual(section["entries"], [{"name": "fra", "count": 1, "breakdown": [{"name": "HW", "count": 1}]}])

    def test_titles_follow_mode_vocabulary(self):
        modes = ModesConfig(maintenance="MAINT", freeze_env="FROZEN")
        sections = _sections(build_fleet_report_view(aggregate([]), modes))
        self.assertEqual(sections["freeze_env"]["title"], "Total servers in FROZEN empty")
        self.assertEqual(sections["maintenance"]["subtitle"], "Servers in MAINT per location:")
        self.assertEqual(sections["maintenance_by_type"]["subtitle"], "Servers in MAINT per location and type:")

    def test_empty_tables(self):
        view = build_fleet_report_view(aggregate([]), record_count=0)
        self.assertEqual(view["metadata"], {"record_count": 0})
        for section in view["sections"]:
            self.assertEqual(section["total"], 0)
            self.assertEqual(section["entries"], [])

    def test_nested_entry_count_matches_breakdown(self):
        servers = [
            ServerRecord(location="fra", mode="AGENT_MODE_SETUP", vms=""),
            ServerRecord(location="fra", mode="AGENT_MODE_SETUP", vms=""),
            ServerRecord(location="fra", mode="AGENT_MODE_NOT_READY", vms=""),
            ServerRecord(location="ams", mode="AGENT_MODE_SETUP", vms=""),
        ]
        section = _sections(build_fleet_report_view(aggregate(servers)))["non_normal"]
        self.assertEqual(section["total"], 4)
        for entry in section["entries"]:
            self.assertEqual(entry["count"], sum(item["count"] for item in entry["breakdown"]))
        self.assertEqual([e["name"] for e in section["entries"]], ["fra", "ams"])
        self.assertEqual(
            section["entries"][0]["breakdown"],
            [{"name": "AGENT_MODE_SETUP", "count": 2}, {"name": "AGENT_MODE_NOT_READY", "count": 1}],
        )


class BreakdownRowsTests(unittest.TestCase):

    def test_rows_follow_report_order(self):
        rows = iter_breakdown_rows(_scenario_view())
        self.assertEqual(
            rows,
            [
                {"section": "non_normal", "location": "ams", "submetric": "AGENT_MODE_FREEZE_ENV", "count": 1},
                {"section": "non_normal", "location": "fra", "submetric": "AGENT_MODE_MAINTENANCE", "count": 1},
                {"section": "non_income", "location": "ams", "submetric": "", "count": 1},
                {"section": "non_income", "location": "fra", "submetric": "", "count": 1},
                {"section": "freeze_env", "location": "ams", "submetric": "", "count": 1},
                {"section": "maintenance", "location": "fra", "submetric": "", "count": 1},
                {"section": "maintenance_by_type", "location": "fra", "submetric": "HW", "count": 1},
            ],
        )

    def test_empty_view(self):
        self.assertEqual(iter_breakdown_rows(build_fleet_report_view(aggregate([]))), [])
