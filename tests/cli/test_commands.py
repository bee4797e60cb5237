"""Command surface: argument handling, output, exit codes."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mission import api
from mission.cli.main import app
from mission.lib import clock
from mission.lib.ids import short_id

runner = CliRunner()


def mc(*args):
    return runner.invoke(app, list(args))


def test_no_args_shows_help(test_mission):
    result = mc()
    assert result.exit_code == 0
    assert "Mission control" in result.stdout


def test_task_create_and_list(test_mission):
    result = mc("task", "create", "Process receipts", "Nightly")
    assert result.exit_code == 0
    assert result.stdout.startswith("Task created: ")
    task_id = result.stdout.split(": ")[1].strip()

    result = mc("task", "list")
    assert result.exit_code == 0
    assert f"[{short_id(task_id)}] [inbox] Process receipts" in result.stdout


def test_task_list_empty(test_mission):
    assert "No tasks found." in mc("task", "list").stdout


def test_task_list_json(task_id):
    result = mc("--json", "task", "list")
    data = json.loads(result.stdout)
    assert data[0]["id"] == task_id
    assert data[0]["status"] == "inbox"


def test_task_update_by_suffix(task_id):
    result = mc("task", "update", short_id(task_id), "review")
    assert result.exit_code == 0
    assert api.tasks.get_task(task_id).status == "review"


def test_task_update_invalid_status(task_id):
    result = mc("task", "update", short_id(task_id), "finished")
    assert result.exit_code == 1
    assert "ValidationError" in result.output


def test_task_update_unknown_fragment(task_id):
    result = mc("task", "update", "zzzzzzzz", "done")
    assert result.exit_code == 1
    assert "Task not found: zzzzzzzz" in result.output


def test_task_assign_by_name(agents, task_id):
    api.tasks.update_task(task_id, status="done")

    result = mc("task", "assign", short_id(task_id), "jarvis", "GRIZMAN")

    assert result.exit_code == 0
    assert "Task assigned to Jarvis, Grizman" in result.stdout
    task = api.tasks.get_task(task_id)
    assert task.status == "assigned"
    assert task.assignee_ids == [agents["jarvis"], agents["grizman"]]


def test_task_assign_unknown_agent(agents, task_id):
    result = mc("task", "assign", short_id(task_id), "nobody")
    assert result.exit_code == 1
    assert "Agent not found: nobody" in result.output


def test_agent_create_list_status(test_mission):
    assert mc("agent", "create", "Jarvis", "Operations").exit_code == 0

    result = mc("agent", "status", "jarvis", "blocked")
    assert result.exit_code == 0
    assert "Jarvis status -> blocked" in result.stdout

    result = mc("agent", "list")
    assert "[blocked] Jarvis - Operations" in result.stdout


def test_agent_status_with_task(agents, task_id):
    result = mc("agent", "status", "Jarvis", "active", "--task", short_id(task_id))
    assert result.exit_code == 0
    assert api.agents.get_agent(agents["jarvis"]).current_task_id == task_id
    assert f"-> task:{short_id(task_id)}" in mc("agent", "list").stdout


def test_agent_duplicate(agents):
    result = mc("agent", "create", "Jarvis", "Again")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_message_post_default_sender(agents, task_id):
    result = mc("message", "post", short_id(task_id), "Started")
    assert result.exit_code == 0

    [message] = api.messages.list_messages(task_id)
    assert message.from_agent_id == agents["jarvis"]

    result = mc("message", "list", short_id(task_id))
    assert "Jarvis: Started" in result.stdout


def test_message_post_named_sender_with_attachments(agents, task_id):
    result = mc(
        "message", "post", short_id(task_id), "Data", "Grizman", "--attach", "a.csv", "--attach", "b.csv"
    )
    assert result.exit_code == 0
    [message] = api.messages.list_messages(task_id)
    assert message.from_agent_id == agents["grizman"]
    assert message.attachments == ["a.csv", "b.csv"]


def test_message_post_without_agents(task_id):
    result = mc("message", "post", short_id(task_id), "hello")
    assert result.exit_code == 1
    assert "No agents found" in result.output


def test_doc_create_list_show(task_id):
    result = mc("doc", "create", "Report", "Body text", "deliverable", short_id(task_id))
    assert result.exit_code == 0
    doc_id = result.stdout.split(": ")[1].strip()

    assert f"[{short_id(doc_id)}] [deliverable] Report" in mc("doc", "list", short_id(task_id)).stdout
    assert "Body text" in mc("doc", "show", short_id(doc_id)).stdout


def test_doc_create_unknown_task_creates_unattached(test_mission):
    result = mc("doc", "create", "Report", "Body", "research", "zzzz9999")
    assert result.exit_code == 0

    [doc] = api.documents.list_documents()
    assert doc.title == "Report"
    assert doc.task_id is None


def test_activity_log_and_feed(agents, fixed_clock):
    assert mc("activity", "log", "deploy", "Shipped", "Jarvis").exit_code == 0
    fixed_clock.advance(seconds=1)
    assert mc("activity", "log", "note", "Later").exit_code == 0

    result = mc("activity", "feed", "1")
    assert "[note] Later" in result.stdout
    assert "Shipped" not in result.stdout


def test_activity_log_unknown_agent_logs_without_agent(agents):
    result = mc("activity", "log", "info", "hello", "Nobody")
    assert result.exit_code == 0

    [activity] = api.activities.list_recent()
    assert activity.message == "hello"
    assert activity.agent_id is None


def test_activity_feed_empty(test_mission):
    assert "No activities." in mc("activity", "feed").stdout


def test_notify_list_deliver(agents):
    result = mc("notify", "jarvis", "Review please")
    assert result.exit_code == 0
    notification_id = result.stdout.rsplit(": ", 1)[1].strip()

    assert "-> Jarvis: Review please" in mc("notifications", "list", "Jarvis").stdout

    assert mc("notifications", "deliver", short_id(notification_id)).exit_code == 0
    assert mc("notifications", "deliver", short_id(notification_id)).exit_code == 0
    assert "No undelivered notifications." in mc("notifications", "list").stdout


def test_calendar_seed_list_toggle_run(test_mission, fixed_clock, tmp_path):
    seed_file = tmp_path / "calendar.yaml"
    seed_file.write_text(
        "entries:\n"
        "  - title: Friday Report\n"
        "    schedule: Fridays at 14:00\n"
        "    cron_expr: '0 14 * * 5'\n"
        "    agent_id: Jarvis\n"
    )

    result = mc("calendar", "seed", str(seed_file))
    assert result.exit_code == 0
    assert "Upserted: Friday Report" in result.stdout
    assert mc("calendar", "seed", str(seed_file)).exit_code == 0

    [entry] = api.calendar.list_entries()
    assert "[on] Fridays at 14:00: Friday Report @Jarvis" in mc("calendar", "list").stdout

    result = mc("calendar", "toggle", short_id(entry.id))
    assert "Friday Report: disabled" in result.stdout

    assert mc("calendar", "run", short_id(entry.id)).exit_code == 0
    assert api.calendar.get_entry(entry.id).last_run_at is not None


def test_calendar_seed_example_file(test_mission, fixed_clock):
    example = Path(__file__).parents[2] / "calendar.example.yaml"
    result = mc("calendar", "seed", str(example))
    assert result.exit_code == 0

    entries = {e.title: e for e in api.calendar.list_entries()}
    retry = entries["Visma Queue Retry"]
    assert retry.enabled is True
    assert retry.next_run_at == clock.to_ms(datetime(2024, 1, 2, 1, 0))
    assert entries["Daily X/Twitter Digest"].next_run_at is None


def test_calendar_seed_bad_file(test_mission, tmp_path):
    seed_file = tmp_path / "calendar.yaml"
    seed_file.write_text("entries: nope\n")
    assert mc("calendar", "seed", str(seed_file)).exit_code == 1


def test_calendar_seed_continues_past_bad_entry(test_mission, tmp_path):
    seed_file = tmp_path / "calendar.yaml"
    seed_file.write_text(
        "entries:\n"
        "  - title: Good\n"
        "    cron_expr: '0 1 * * *'\n"
        "  - title: Bad\n"
        "    cron_expr: '0 1 * *'\n"
        "  - title: After\n"
        "    cron_expr: '0 14 * * 5'\n"
    )

    result = mc("calendar", "seed", str(seed_file))
    assert result.exit_code == 1
    assert "Upserted: Good" in result.output
    assert "Upserted: After" in result.output
    assert "Failed: Bad" in result.output
    assert "Seeding complete." in result.output
    assert sorted(e.title for e in api.calendar.list_entries()) == ["After", "Good"]


@pytest.mark.parametrize("expr,code", [("0 1 * * *", 0), ("0 1 * *", 1)])
def test_calendar_next(test_mission, expr, code):
    assert mc("calendar", "next", expr).exit_code == code


def test_store_failure_exits_nonzero(test_mission):
    from mission.errors import StoreError
    from mission.lib import store

    class BrokenStore:
        def scan(self, *args, **kwargs):
            raise StoreError("unreachable", status=503)

        def close(self):
            pass

    store.set_store(BrokenStore())
    result = mc("task", "list")
    assert result.exit_code == 1
    assert "StoreError: [503] unreachable" in result.output
