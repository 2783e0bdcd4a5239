"""Tests for the check_email command line interface."""

from unittest.mock import patch

import pytest
import requests
from click.testing import CliRunner

import check_email
from check_email import main, normalize_email

JOB_PROCESSING = '{"id": 7, "status": "processing", "progress": {"unprocessed": 3}}'
JOB_COMPLETED = """{
    "id": 7, "status": "completed", "download_url": "https://dl.test/7.csv",
    "stats": {"deliverable": 2, "addresses": 3, "sendex": 0.5}
}"""


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, client, *args):
    return runner.invoke(main, list(args), obj=client)


class TestNormalizeEmail:
    def test_valid(self):
        ok, normalized, domain, notes = normalize_email("bill@Gmail.com")
        assert ok
        assert normalized == "bill@gmail.com"
        assert domain == "gmail.com"
        assert notes == []

    def test_invalid(self):
        ok, normalized, domain, notes = normalize_email("not-an-email")
        assert not ok
        assert normalized is None
        assert notes and notes[0].startswith("Syntax error")


class TestVerifyCommand:
    def test_deliverable(self, runner, client, adapter):
        adapter.add(
            "GET", "/v2/verify", 200,
            '{"result": "deliverable", "sendex": 0.9, "free": true, "success": true}',
        )

        result = invoke(runner, client, "verify", "bill@gmail.com")

        assert result.exit_code == 0, result.output
        assert "deliverable" in result.output
        assert "free" in result.output
        assert "DELIVERABLE" in result.output

    def test_service_error(self, runner, client, adapter):
        adapter.add("GET", "/v2/verify", 400, '{"success": false, "message": "Bad key"}')

        result = invoke(runner, client, "verify", "bill@gmail.com")

        assert result.exit_code == 1
        assert "Bad key" in result.output

    def test_syntax_error_skips_api(self, runner, client, adapter):
        result = invoke(runner, client, "verify", "not-an-email")

        assert result.exit_code == 1
        assert "Syntax error" in result.output
        assert adapter.sent == []

    def test_skip_syntax(self, runner, client, adapter):
        adapter.add("GET", "/v2/verify", 200, '{"result": "undeliverable", "success": true}')

        result = invoke(runner, client, "verify", "--skip-syntax", "not-an-email")

        assert result.exit_code == 0, result.output
        assert "DO NOT SEND" in result.output

    def test_transport_error(self, runner, client, adapter):
        adapter.error = requests.ConnectionError("refused")

        result = invoke(runner, client, "verify", "bill@gmail.com")

        assert result.exit_code == 1
        assert "Error doing request" in result.output


class TestBatchCommand:
    def test_upload(self, runner, client, adapter, tmp_path):
        csv_file = tmp_path / "leads.csv"
        csv_file.write_bytes(b'"a@b.com","A"\n')
        adapter.add("PUT", "/v2/verify-batch", 200, '{"id": 123, "success": true}')

        result = invoke(
            runner, client, "batch", str(csv_file), "--callback", "http://cb.test"
        )

        assert result.exit_code == 0, result.output
        assert "123" in result.output
        sent = adapter.last
        assert sent.body == b'"a@b.com","A"\n'
        assert sent.headers["X-Kickbox-Filename"] == "leads.csv"
        assert sent.headers["X-Kickbox-Callback"] == "http://cb.test"

    def test_no_callback_header_by_default(self, runner, client, adapter, tmp_path):
        csv_file = tmp_path / "leads.csv"
        csv_file.write_bytes(b'"a@b.com","A"\n')
        adapter.add("PUT", "/v2/verify-batch", 200, '{"id": 1, "success": true}')

        invoke(runner, client, "batch", str(csv_file), "--filename", "")

        assert "X-Kickbox-Callback" not in adapter.last.headers
        assert "X-Kickbox-Filename" not in adapter.last.headers

    def test_non_ascii_file_name(self, runner, client, adapter, tmp_path):
        csv_file = tmp_path / "客户.csv"
        csv_file.write_bytes(b'"a@b.com","A"\n')
        adapter.add("PUT", "/v2/verify-batch", 200, '{"id": 9, "success": true}')

        result = invoke(runner, client, "batch", str(csv_file))

        assert result.exit_code == 0, result.output
        assert adapter.last.headers["X-Kickbox-Filename"] == "客户.csv".encode("utf-8")


class TestStatusCommand:
    def test_single_poll(self, runner, client, adapter):
        adapter.add("GET", "/v2/verify-batch/7", 200, JOB_PROCESSING)

        result = invoke(runner, client, "status", "7")

        assert result.exit_code == 0, result.output
        assert "processing" in result.output
        assert "3 left" in result.output
        assert len(adapter.sent) == 1

    def test_watch_until_completed(self, runner, client, adapter):
        adapter.add("GET", "/v2/verify-batch/7", 200, JOB_PROCESSING)

        def complete(_):
            adapter.add("GET", "/v2/verify-batch/7", 200, JOB_COMPLETED)

        with patch.object(check_email.time, "sleep", side_effect=complete) as sleep:
            result = invoke(runner, client, "status", "7", "--watch", "--interval", "1")

        assert result.exit_code == 0, result.output
        sleep.assert_called_once_with(1.0)
        assert len(adapter.sent) == 2
        assert "https://dl.test/7.csv" in result.output

    def test_service_error(self, runner, client, adapter):
        adapter.add(
            "GET", "/v2/verify-batch/7", 404, '{"success": false, "message": "No job"}'
        )

        result = invoke(runner, client, "status", "7")

        assert result.exit_code == 1
        assert "No job" in result.output

    def test_missing_envelope_is_not_an_error(self, runner, client, adapter):
        adapter.add("GET", "/v2/verify-batch/7", 200, '{"id": 7, "status": "completed"}')

        result = invoke(runner, client, "status", "7")

        assert result.exit_code == 0, result.output
        assert "completed" in result.output


class TestBalanceAndDisposable:
    def test_balance(self, runner, client, adapter):
        adapter.add("GET", "/v2/balance", 200, '{"balance": 1337, "success": true}')

        result = invoke(runner, client, "balance")

        assert result.exit_code == 0, result.output
        assert "1337" in result.output

    def test_balance_error(self, runner, client, adapter):
        adapter.add("GET", "/v2/balance", 200, '{"balance": 0, "success": false}')

        result = invoke(runner, client, "balance")

        assert result.exit_code == 1
        assert "Unknown error verifying email" in result.output

    def test_disposable(self, runner, client, adapter):
        adapter.add("GET", "/v1/disposable/x@mailinator.com", 200, '{"disposable": true}')

        result = invoke(runner, client, "disposable", "x@mailinator.com")

        assert result.exit_code == 0, result.output
        assert "yes" in result.output


def test_missing_api_key(runner, monkeypatch):
    monkeypatch.delenv("KICKBOX_API_KEY", raising=False)
    with patch("kickbox.config.load_dotenv"):
        result = runner.invoke(main, ["balance"])

    assert result.exit_code == 1
    assert "KICKBOX_API_KEY" in result.output
