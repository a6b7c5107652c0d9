"""Tests for TemplateManager and the built-in templates."""

import json

import pytest

from circuitforge.controllers.template_manager import BUILTIN_TEMPLATES_DIR, TemplateManager
from circuitforge.models.template import TemplateData
from circuitforge.simulation import simulate_snapshot


@pytest.fixture
def manager(tmp_path):
    return TemplateManager(user_dir=tmp_path / "user")


class TestBuiltinTemplates:
    def test_builtin_dir_exists(self):
        assert BUILTIN_TEMPLATES_DIR.is_dir()

    def test_lists_builtins(self, manager):
        ids = [t.template_id for t in manager.list_templates()]
        assert set(ids) == {"simple-led", "voltage-divider", "rc-circuit"}

    def test_sorted_by_category_then_name(self, manager):
        keys = [(t.category, t.name) for t in manager.list_templates()]
        assert keys == sorted(keys)

    def test_simple_led_contents(self, manager):
        template = manager.load_template("simple-led")
        assert template.category == "learning"
        kinds = [c.component_type for c in template.circuit.components]
        assert kinds == ["battery", "resistor", "led", "ground"]
        assert template.circuit.get_component("resistor-1").value == "220Ω"
        assert len(template.circuit.wires) == 4

    def test_simple_led_simulates(self, manager):
        result = simulate_snapshot(manager.load_template("simple-led").circuit)
        assert result.success
        assert result.warnings == []
        assert result.node_voltages["n1"] == pytest.approx(9.0)
        assert result.component_currents["resistor-1"] == pytest.approx(-9.0 / 220)

    def test_voltage_divider_simulates(self, manager):
        result = simulate_snapshot(manager.load_template("voltage-divider").circuit)
        assert result.node_voltages == pytest.approx({"n0": 0.0, "n1": 12.0, "n2": 0.0})

    def test_rc_circuit_capacitor_carries_no_current(self, manager):
        result = simulate_snapshot(manager.load_template("rc-circuit").circuit)
        assert "capacitor-1" not in result.component_currents

    def test_unknown_template(self, manager):
        with pytest.raises(KeyError):
            manager.load_template("nope")
        assert manager.get_template("nope") is None


class TestUserTemplates:
    def test_save_and_list(self, manager, divider_snapshot):
        template = TemplateData("my-div", "My Divider", circuit=divider_snapshot, category="analog")
        path = manager.save_template(template)
        assert path == manager.user_dir / "my-div.json"
        assert manager.load_template("my-div") == template

    def test_user_overrides_builtin(self, manager):
        manager.save_template(TemplateData("simple-led", "Mine"))
        assert manager.load_template("simple-led").name == "Mine"

    def test_broken_file_skipped(self, manager):
        manager.user_dir.mkdir(parents=True)
        (manager.user_dir / "broken.json").write_text("{not json")
        (manager.user_dir / "wrong.json").write_text(json.dumps({"components": "x", "wires": []}))
        ids = [t.template_id for t in manager.list_templates()]
        assert "broken" not in ids
        assert "wrong" not in ids
        assert len(ids) == 3

    def test_bad_routing_points_skipped(self, manager):
        manager.user_dir.mkdir(parents=True)
        wire = {
            "id": "w1",
            "from": {"componentId": "a", "terminalId": "a-t1"},
            "to": {"componentId": "b", "terminalId": "b-t1"},
            "points": None,
        }
        (manager.user_dir / "bad-points.json").write_text(json.dumps({"components": [], "wires": [wire]}))
        ids = [t.template_id for t in manager.list_templates()]
        assert "bad-points" not in ids
        assert len(ids) == 3

    def test_missing_id_uses_file_name(self, manager):
        manager.user_dir.mkdir(parents=True)
        (manager.user_dir / "anon.json").write_text(json.dumps({"components": [], "wires": []}))
        assert manager.load_template("anon").name == "anon"

    def test_delete(self, manager):
        manager.save_template(TemplateData("tmp", "Temp"))
        assert manager.delete_template("tmp") is True
        assert manager.delete_template("tmp") is False
        assert manager.get_template("tmp") is None

    def test_missing_user_dir(self, tmp_path):
        manager = TemplateManager(builtin_dir=tmp_path / "none", user_dir=tmp_path / "also-none")
        assert manager.list_templates() == []
