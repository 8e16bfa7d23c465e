from __future__ import annotations

import pytest

from riboreader import Ribo


@pytest.fixture
def reads(monkeypatch):
    """Record the datasets read through :meth:`.Ribo.read_block`."""
    calls = []
    read_block = Ribo.read_block

    def recording_read_block(self, name, rows, cols=None):
        calls.append(name)
        return read_block(self, name, rows, cols)

    monkeypatch.setattr(Ribo, "read_block", recording_read_block)
    return calls
