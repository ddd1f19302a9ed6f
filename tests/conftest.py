import json
import os
import sys
import threading
import time

import pytest

# Ensure project root is on sys.path so netreport.* and launcher import
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

ROUTE_CMD = ("sh", "-c", "ip route | awk '/default/ {print $5}'")
WIFI_CMD = ("sh", "-c", "iw dev | awk '$1==\"Interface\"{print $2}'")


def addr_cmd(iface):
    return ("sh", "-c", f"ip -o -f inet addr show dev {iface} | awk '{{print $4}}'")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )


class FakeRunner:
    """Runner stand-in returning canned (text, ok) pairs per invocation.

    *responses* maps ``(command, *args)`` tuples to ``(text, ok)`` or to
    ``(text, ok, delay_seconds)``.  Unknown invocations fail the way a
    missing executable would.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def run(self, command, *args):
        key = (command, *args)
        with self._lock:
            self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            return f"[Errno 2] No such file or directory: '{command}'", False
        if len(response) == 3:
            text, ok, delay = response
            time.sleep(delay)
            return text, ok
        return response

    def called(self, command):
        return [c for c in self.calls if c[0] == command]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def healthy_responses():
    """Canned outputs for a fully working wlan0 setup."""
    return {
        ROUTE_CMD: ("wlan0\n", True),
        addr_cmd("wlan0"): ("192.168.1.0/24\n", True),
        WIFI_CMD: ("wlan0\n", True),
        ("nmap", "-sn", "192.168.1.0/24"): (
            "Nmap scan report for 192.168.1.1\nHost is up (0.0030s latency).\n"
            "Nmap done: 256 IP addresses (1 host up) scanned in 2.51 seconds\n",
            True,
        ),
        ("iw", "dev", "wlan0", "link"): (
            "Connected to aa:bb:cc:dd:ee:ff (on wlan0)\n"
            "\tSSID: home\n"
            "\tfreq: 5180 MHz\n"
            "\tsignal: -48 dBm\n",
            True,
        ),
        ("speedtest", "--server", "3696", "--simple"): (
            "Ping: 12.3 ms\nDownload: 250.10 Mbit/s\nUpload: 90.45 Mbit/s\n",
            True,
        ),
    }


@pytest.fixture
def tmp_config(tmp_path):
    """Create a temporary config.json and return its path."""
    config = {
        "probes": {"bandwidth_target": "1234", "command_timeout": 60},
        "labels": {"title": "Network Report", "bandwidth": "Speedtest"},
    }
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config))
    return str(config_file)


@pytest.fixture
def bad_config(tmp_path):
    """Create an invalid JSON config file and return its path."""
    config_file = tmp_path / "config.json"
    config_file.write_text("{invalid json content")
    return str(config_file)
