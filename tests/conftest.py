"""
Pytest fixtures for lognorm tests.
"""

import pytest

from lognorm.core.models import SiemLog


GENERAL_TIMESTAMP = "2021-04-08T12:14:18.123456Z"

PULSE_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/89.0.4389.114 Safari/537.36"
)


def general_line(session: str, command: str, argument: str = "", timestamp: str = GENERAL_TIMESTAMP) -> str:
    """Build a MySQL general log line with the fixed-width prefix."""
    line = f"{timestamp} {session.rjust(9)} {command}"
    if argument:
        line += f"     {argument}"
    return line


def pulse_line(msg: str, **overrides: str) -> str:
    """Build a PulseSecure line behind a syslog header."""
    values = {
        "time": '"2021-04-08 12:14:18"',
        "fw": "10.0.0.9",
        "user": "usertest2",
        "realm": '"Users"',
        "src": "82.213.178.130",
        "agent": f'"{PULSE_AGENT}"',
    }
    values.update(overrides)
    parts = [
        "id=firewall",
        f"time={values['time']}",
        "pri=6",
        f"fw={values['fw']}",
        "vpn=ive",
        "ivs=Default Network",
        f"user={values['user']}",
        f"realm={values['realm']}",
        'roles=""',
        "proto=auth",
        f"src={values['src']}",
        "dst=",
        "dstname=",
        "type=vpn",
        "op=",
        'arg=""',
        "result=",
        "sent=",
        "rcvd=",
        f"agent={values['agent']}",
        "duration=",
        f'msg="{msg}"',
    ]
    return "2021-04-08T12:14:18-07:00 10.0.0.111 PulseSecure: " + " ".join(parts)


@pytest.fixture
def general_query_line() -> str:
    return general_line("12", "Query", "SELECT * FROM users WHERE id = 1")


@pytest.fixture
def general_connect_line() -> str:
    return general_line("12", "Connect", "root@10.0.0.5 on shop using TCP/IP")


@pytest.fixture
def general_quit_line() -> str:
    return general_line("12", "Quit")


@pytest.fixture
def pulse_login_line() -> str:
    """A successful VPN login (AUT31504)."""
    return pulse_line(
        "AUT31504: Login succeeded for usertest2/Users (session:00000000) "
        f"from 82.213.178.130 with {PULSE_AGENT}."
    )


@pytest.fixture
def pulse_logout_line() -> str:
    """A bare WELF logout line, as captured from an appliance."""
    return (
        'id=firewall time="2021-04-08 11:57:48" pri=6 fw=10.0.0.9 vpn=ive '
        'ivs=Default Network user=usettest1 realm="" roles="" proto=auth '
        'src=82.213.178.130 dst= dstname= type=vpn op= arg="" result= sent= '
        'rcvd= agent="" duration= '
        'msg="AUT22673: Logout from 82.213.178.130 (session:00000000)"'
    )


@pytest.fixture
def make_log():
    """Factory for records the way a collector would hand them over."""
    def _make(message: str) -> SiemLog:
        return SiemLog(message=message, date=1617884058000)
    return _make


@pytest.fixture
def make_general_line():
    return general_line


@pytest.fixture
def make_pulse_line():
    return pulse_line
