from __future__ import annotations

import json

from botocore.exceptions import ClientError
from typer.testing import CliRunner

from sqsdemo.cli import app

runner = CliRunner()


def test_full_walkthrough(bus):
    result = runner.invoke(app, ["-q", "orders", "-m", "5", "-w", "0"])
    assert result.exit_code == 0, result.output
    assert "Your new dead-letter queue:" in result.output
    assert "Your new message queue:" in result.output
    assert result.output.count("The product received is :") == 2

    urls = bus.list_queues()
    main_url = next(u for u in urls if u.endswith("/orders"))
    policy = json.loads(bus.get_all_attributes(main_url)["RedrivePolicy"])
    assert int(policy["maxReceiveCount"]) == 5
    assert bus.receive_messages(main_url, 0) == []


def test_long_flags_and_existing_dead_letter_queue(bus):
    dlq_url = bus.create_queue("existing-dlq")
    result = runner.invoke(app, ["--queue-name", "orders", "--dead-letter-queue", dlq_url, "--wait-time", "0"])
    assert result.exit_code == 0, result.output
    assert "No dead-letter queue was specified" not in result.output
    assert len(bus.list_queues()) == 2


def test_missing_queue_name_value(bus):
    result = runner.invoke(app, ["-q"])
    assert result.exit_code == 1
    assert "You must supply a queue name." in result.output
    assert bus.list_queues() == []


def test_missing_queue_name_flag(bus):
    result = runner.invoke(app, ["-w", "0"])
    assert result.exit_code == 1
    assert "You must supply a queue name." in result.output


def test_duplicate_option(bus):
    result = runner.invoke(app, ["-q", "a", "-q", "b"])
    assert result.exit_code == 1
    assert "Option -q was given more than once" in result.output
    assert bus.list_queues() == []


def test_non_numeric_wait_time(bus):
    result = runner.invoke(app, ["-q", "orders", "-w", "soon"])
    assert result.exit_code == 1
    assert "The wait time must be a whole number" in result.output
    assert bus.list_queues() == []


def test_too_many_arguments_prints_help(bus):
    result = runner.invoke(app, ["-q", "orders", "-d", "url", "-m", "1", "-w", "0", "extra"])
    assert result.exit_code == 0
    assert "Usage: sqs-demo" in result.output
    assert bus.list_queues() == []


def test_no_arguments_declined(bus):
    bus.create_queue("visible")
    result = runner.invoke(app, [], input="n\n")
    assert result.exit_code == 0
    assert "No arguments specified." in result.output
    assert "Queue: " not in result.output


def test_no_arguments_default_lists_queues(bus):
    url = bus.create_queue("visible")
    result = runner.invoke(app, [], input="\n")
    assert result.exit_code == 0
    assert f"Queue: {url}" in result.output
    assert "\tQueueArn: " in result.output


def test_service_error_propagates(bus):
    missing = "https://sqs.us-east-1.amazonaws.com/123456789012/missing"
    result = runner.invoke(app, ["-q", "orders", "-d", missing, "-w", "0"])
    assert result.exit_code != 0
    assert isinstance(result.exception, ClientError)
    assert bus.list_queues() == []


def test_double_dash_reaches_parser(bus):
    # "--" takes "orders" as its value, leaving -q empty
    result = runner.invoke(app, ["-q", "--", "orders"])
    assert result.exit_code == 1
    assert "You must supply a queue name." in result.output


def test_help_flag_is_an_ordinary_token(bus):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 1
    assert "You must supply a queue name." in result.output


def test_invalid_log_level(bus, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    result = runner.invoke(app, ["-q", "orders", "-w", "0"])
    assert result.exit_code == 1
    assert "LOG_LEVEL" in result.output
    assert bus.list_queues() == []
