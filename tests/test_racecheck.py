import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from bookingsys.racecheck import RaceResult, book, main, run_race


class _OneShotHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", "0"))
        data = json.loads(self.rfile.read(length))
        server = self.server
        with server.lock:
            server.received.append(data)
            first = not server.booked
            server.booked = True
        if first:
            self.send_response(201)
            self.send_header("Content-Length", "0")
            self.end_headers()
        else:
            body = b'{"error":"taken"}\n'
            self.send_response(400)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    srv = ThreadingHTTPServer(("127.0.0.1", 0), _OneShotHandler)
    srv.lock = threading.Lock()
    srv.received = []
    srv.booked = False
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()


def _url(srv):
    host, port = srv.server_address[:2]
    return f"http://{host}:{port}/api/bookings"


def _closed_port_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/api/bookings"


def test_book_sends_json_and_returns_status(server):
    status, body = book(_url(server), 3, 1)
    assert status == 201
    assert body == ""
    assert server.received == [{"user_id": 3, "resource_id": 1}]


def test_book_returns_error_status_and_body(server):
    book(_url(server), 1, 1)
    status, body = book(_url(server), 2, 1)
    assert status == 400
    assert json.loads(body) == {"error": "taken"}


def test_book_network_error_raises():
    with pytest.raises(OSError):
        book(_closed_port_url(), 1, 1)


def test_run_race_counts_single_success(server):
    result = run_race(_url(server), 5, 1)
    assert result == RaceResult(attempts=5, done=1)
    assert sorted(item["user_id"] for item in server.received) == [1, 2, 3, 4, 5]
    assert all(item["resource_id"] == 1 for item in server.received)


def test_run_race_network_errors_count_nothing():
    result = run_race(_closed_port_url(), 3, 1)
    assert result == RaceResult(attempts=3, done=0)


def test_main_prints_summary(server, capsys):
    assert main(["--url", _url(server), "--count", "3", "--resource-id", "2"]) == 0
    out = capsys.readouterr().out
    assert "Total attempts: 3" in out
    assert "Done bookings: 1 - bug" in out
    assert out.count("resource 2 booked") == 1