"""
Integration tests: wrapped runs end to end.

A small local HTTP server stands in for the ping endpoint so the real
requests-based client, the supervisor and the CLI are exercised together.
"""

import io
import logging
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from hcp.cli import run_cli
from hcp.executor import ProcessSupervisor
from hcp.models import ABNORMAL_EXIT_CODE
from hcp.notify import NotificationProtocol


class PingRecorder(BaseHTTPRequestHandler):
    """Records every request as (method, path, body)."""

    def _record(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8") if length else ""
        self.server.requests.append((self.command, self.path, body))
        status = self.server.status
        self.send_response(status)
        self.send_header("Content-Length", "2")
        self.end_headers()
        self.wfile.write(b"OK")

    do_GET = _record
    do_POST = _record

    def log_message(self, format, *args):
        pass


@pytest.fixture
def ping_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), PingRecorder)
    server.requests = []
    server.status = 200
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


@pytest.fixture
def cli_env(child_env, temp_dir, ping_server):
    """Environment whose config file points the client at the local server."""
    host, port = ping_server.server_address[:2]
    (temp_dir / "hcp").mkdir()
    (temp_dir / "hcp" / "config.toml").write_text(
        f'[notify]\nbase_url = "http://{host}:{port}"\ntimeout_seconds = 5\n'
    )
    env = dict(child_env)
    env["XDG_CONFIG_HOME"] = str(temp_dir)
    return env


@pytest.fixture(autouse=True)
def restore_root_log_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.mark.integration
class TestWrappedRunOverHttp:
    """The CLI against a real HTTP endpoint."""

    def test_successful_run(self, ping_server, cli_env, check_id):
        code = run_cli(
            ["--hcp-id", check_id, sys.executable, "-c", "print('backup done')"], cli_env
        )

        assert code == 0
        assert ping_server.requests == [
            ("GET", f"/{check_id}/start", ""),
            ("POST", f"/{check_id}", "Command exited with exit code 0\nstdout:\nbackup done\n\n"),
        ]

    def test_failed_run(self, ping_server, cli_env, check_id):
        code = run_cli(
            [
                "--hcp-id", check_id, sys.executable, "-c",
                "import sys; print('disk full', file=sys.stderr); sys.exit(2)",
            ],
            cli_env,
        )

        assert code == 2
        method, path, body = ping_server.requests[-1]
        assert (method, path) == ("POST", f"/{check_id}/fail")
        assert body == "Command exited with exit code 2\nstderr:\ndisk full\n\n"

    def test_ignore_code_still_reports_failure(self, ping_server, cli_env, check_id):
        code = run_cli(
            [
                "--hcp-id", check_id, "--hcp-ignore-code",
                sys.executable, "-c", "import sys; sys.exit(7)",
            ],
            cli_env,
        )

        assert code == 0
        assert ping_server.requests[-1] == (
            "POST", f"/{check_id}/fail", "Command exited with exit code 7\n"
        )

    def test_no_command(self, ping_server, cli_env, check_id):
        assert run_cli(["--hcp-id", check_id], cli_env) == 0
        assert ping_server.requests == [("POST", f"/{check_id}", "No command given")]

    def test_rejected_final_ping(self, ping_server, cli_env, check_id):
        ping_server.status = 500

        code = run_cli(["--hcp-id", check_id, sys.executable, "-c", "pass"], cli_env)

        assert code == ABNORMAL_EXIT_CODE
        assert [r[1] for r in ping_server.requests] == [f"/{check_id}/start", f"/{check_id}"]

    def test_unreachable_endpoint(self, child_env, temp_dir, check_id):
        (temp_dir / "hcp").mkdir()
        # Port 9 (discard) is expected to refuse connections on the loopback interface.
        (temp_dir / "hcp" / "config.toml").write_text(
            '[notify]\nbase_url = "http://127.0.0.1:9"\ntimeout_seconds = 2\n'
        )
        env = dict(child_env, XDG_CONFIG_HOME=str(temp_dir))

        code = run_cli(["--hcp-id", check_id, sys.executable, "-c", "pass"], env)

        assert code == ABNORMAL_EXIT_CODE

    def test_wrapper_variables_do_not_reach_child(self, ping_server, cli_env, check_id):
        cli_env["HCP_ID"] = check_id
        cli_env["HCP_TEE"] = "1"
        cli_env["HCP_IGNORE_CODE"] = "1"
        script = (
            "import os; print(sorted(k for k in os.environ if k in "
            "('HCP_ID', 'HCP_TEE', 'HCP_IGNORE_CODE', 'HCP_CONFIG')))"
        )

        code = run_cli([sys.executable, "-c", script], cli_env)

        assert code == 0
        assert "stdout:\n[]\n" in ping_server.requests[-1][2]


@pytest.mark.integration
class TestTeeDuringRun:
    """Local echo of child output while it is being reported."""

    def test_hello_world_is_teed_and_reported(self, fake_client, make_run_config):
        stdout_sink, stderr_sink = io.BytesIO(), io.BytesIO()
        supervisor = ProcessSupervisor(stdout_sink, stderr_sink)
        config = make_run_config(
            "import sys; sys.stdout.write('hello\\nworld'); sys.stderr.write('warn\\n')",
            tee=True,
        )

        result = NotificationProtocol(fake_client, supervisor).execute(config)

        assert result.exit_code == 0
        assert stdout_sink.getvalue() == b"hello\nworld"
        assert stderr_sink.getvalue() == b"warn\n"
        assert fake_client.last_body == (
            "Command exited with exit code 0\n"
            "stdout:\nhello\nworld\n"
            "\n"
            "stderr:\nwarn\n\n"
        )

    @pytest.mark.slow
    def test_tee_is_incremental(self, fake_client, make_run_config):
        seen = []

        class ObservingSink(io.BytesIO):
            def write(self, data):
                seen.append(bytes(data))
                return super().write(data)

        code = (
            "import sys, time\n"
            "for i in range(3):\n"
            "    print(f'line {i}', flush=True)\n"
            "    time.sleep(0.05)\n"
        )
        supervisor = ProcessSupervisor(ObservingSink(), io.BytesIO())

        result = NotificationProtocol(fake_client, supervisor).execute(
            make_run_config(code, tee=True)
        )

        assert result.exit_code == 0
        assert b"".join(seen) == b"line 0\nline 1\nline 2\n"
        assert len(seen) >= 2
