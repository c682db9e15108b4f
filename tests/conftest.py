import os

import pytest

from compname import settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the host's config files and environment out of the tests."""
    monkeypatch.setattr(settings, "WELL_KNOWN_PATHS", [])
    for key in list(os.environ):
        if key.upper().startswith("COMPNAME_"):
            monkeypatch.delenv(key)


class FakeKernel32:
    """Stand-in for ``ctypes.windll.kernel32``."""

    def __init__(self, name="DESKTOP-4F2K", error=0):
        self.name = name
        self.error = error

    def GetComputerNameW(self, buffer, size):
        if self.error:
            return 0
        buffer.value = self.name
        size.contents.value = len(self.name)
        return 1

    def GetLastError(self):
        return self.error


@pytest.fixture
def kernel32(monkeypatch):
    from compname import providers

    fake = FakeKernel32()
    monkeypatch.setattr(providers, "load_kernel32", lambda: fake)
    return fake


@pytest.fixture
def no_kernel32(monkeypatch):
    from compname import providers

    def load_kernel32():
        raise AttributeError("module 'ctypes' has no attribute 'windll'")

    monkeypatch.setattr(providers, "load_kernel32", load_kernel32)
