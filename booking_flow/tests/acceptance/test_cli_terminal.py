"""Runs the installed booking-flow command in a real terminal."""

import shutil

import pexpect
import pytest

pytestmark = [
    pytest.mark.acceptance,
    pytest.mark.skipif(shutil.which('booking-flow') is None, reason="booking-flow is not installed"),
]


def test_show_flow_lists_steps():
    child = pexpect.spawn('booking-flow show-flow', timeout=30, encoding='utf-8')

    try:
        child.expect('booking v1.0')
        child.expect('client_info')
        child.expect('Entry path')
        child.expect(pexpect.EOF)
    finally:
        child.close()

    assert child.exitstatus == 0


def test_show_flow_unknown_flow_fails():
    child = pexpect.spawn('booking-flow show-flow nonexistent', timeout=30, encoding='utf-8')

    try:
        child.expect('Flow not found')
        child.expect(pexpect.EOF)
    finally:
        child.close()

    assert child.exitstatus == 1
