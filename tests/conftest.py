"""Shared fixtures for episode producer tests."""

import asyncio

import pytest


class FakeBackend:
    """Stand-in speech backend.

    Returns b"<voice>:<text>|" for each call. `delays` maps text → seconds
    to sleep before answering, `failures` is a set of texts that raise.
    Tracks how many requests are in flight at once.
    """

    def __init__(self, delays=None, failures=None, responses=None):
        self.delays = delays or {}
        self.failures = failures or set()
        self.responses = responses or {}
        self.calls = []
        self.completed = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def synthesize(self, text, voice):
        self.calls.append((text, voice))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(text, 0))
            if text in self.failures:
                raise ConnectionError(f"backend down for {text!r}")
            self.completed.append(text)
            return self.responses.get(text, f"{voice}:{text}|".encode())
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def sample_script():
    return "MESCHELLE: Hi!\nKIM: *laughing* Hey!\nRANDOM: ignored\nMESCHELLE: Bye."


@pytest.fixture
def make_backend():
    """Factory for FakeBackend with custom delays/failures/responses."""
    return FakeBackend
