import json

import pytest
from typer.testing import CliRunner

from engagement_monitor.cli import app

runner = CliRunner()

SCENARIO = "\n".join(
    [
        "# overview closes, lab opens, two ticks, two presses",
        '{"timestamp": 0, "source_id": "sim.showHomeScreenProperty", "payload": false}',
        '{"timestamp": 0, "source_id": "sim.screenIndexProperty", "payload": 1}',
        '{"timestamp": 0, "source_id": "sim.lab.view.mouseDownAction"}',
        '{"timestamp": 16, "source_id": "sim.stepSimulationAction", "payload": 0.016}',
        '{"timestamp": 32, "source_id": "sim.stepSimulationAction", "payload": 0.016}',
        '{"timestamp": 1050, "source_id": "sim.lab.view.mouseDownAction"}',
    ]
)


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(SCENARIO + "\n", encoding="utf-8")
    return path


def test_replay_prints_json_snapshot(events_file):
    result = runner.invoke(
        app,
        ["replay", str(events_file), "-s", "intro", "-s", "lab", "--overview", "--json"],
    )
    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["application"]["total_active_seconds"] == 1
    assert body["sections"][1]["section_id"] == "lab"
    assert body["sections"][1]["total_run_seconds"] == pytest.approx(0.032)


def test_replay_prints_summary(events_file):
    result = runner.invoke(app, ["replay", str(events_file), "-s", "intro", "-s", "lab"])
    assert result.exit_code == 0, result.output
    assert "Engagement summary" in result.stdout
    assert "lab" in result.stdout


def test_replay_aborts_on_rejected_event(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(
        '{"timestamp": 100, "source_id": "sim.stepSimulationAction", "payload": 0.016}\n'
        '{"timestamp": 50, "source_id": "sim.stepSimulationAction", "payload": 0.016}\n',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["replay", str(path), "-s", "intro"])
    assert result.exit_code == 1
    assert "events.jsonl:2" in result.output


def test_replay_can_skip_rejected_events(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(
        '{"timestamp": 0, "source_id": "sim.intro.mouseDownAction"}\n'
        '{"timestamp": 10, "source_id": "sim.screenIndexProperty", "payload": 4}\n'
        "{broken\n"
        '{"timestamp": 1500, "source_id": "sim.stepSimulationAction", "payload": 0.016}\n',
        encoding="utf-8",
    )
    result = runner.invoke(
        app, ["replay", str(path), "-s", "intro", "--skip-invalid", "--json"]
    )
    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["application"]["total_active_seconds"] == 1


def test_replay_requires_sections(events_file):
    result = runner.invoke(app, ["replay", str(events_file)])
    assert result.exit_code != 0


def test_replay_skips_tick_too_large_for_float(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(
        '{"timestamp": 0, "source_id": "sim.intro.mouseDownAction"}\n'
        '{"timestamp": 10, "source_id": "sim.stepSimulationAction", "payload": 1'
        + "0" * 400
        + "}\n"
        '{"timestamp": 1500, "source_id": "sim.stepSimulationAction", "payload": 0.5}\n',
        encoding="utf-8",
    )
    result = runner.invoke(
        app, ["replay", str(path), "-s", "intro", "--skip-invalid", "--json"]
    )
    assert result.exit_code == 0, result.output
    body = json.loads(result.stdout)
    assert body["events_processed"] == 2
    assert body["sections"][0]["total_run_seconds"] == pytest.approx(0.5)
