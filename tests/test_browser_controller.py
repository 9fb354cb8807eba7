"""Unit tests for BrowserController lifecycle handling that need no Chromium."""

import pytest

from browser.controller import BrowserController, ViewportSize


async def _failing_stop(self):
    raise RuntimeError("driver already gone")


@pytest.mark.unit
def test_page_before_start_raises():
    browser = BrowserController(viewport=ViewportSize(width=800, height=600))

    assert not browser.started
    assert browser.viewport == ViewportSize(width=800, height=600)
    with pytest.raises(RuntimeError, match="not started"):
        browser.page


@pytest.mark.unit
async def test_stop_without_start_is_noop():
    browser = BrowserController()

    await browser.stop()
    await browser.stop()

    assert not browser.started


@pytest.mark.unit
async def test_cleanup_failure_does_not_mask_body_error(monkeypatch):
    monkeypatch.setattr(BrowserController, "stop", _failing_stop)
    browser = BrowserController()

    error = KeyError("task failed")

    # returns normally, so the body's KeyError is what the caller sees
    assert await browser.__aexit__(KeyError, error, None) is None


@pytest.mark.unit
async def test_cleanup_failure_after_clean_exit_propagates(monkeypatch):
    monkeypatch.setattr(BrowserController, "stop", _failing_stop)
    browser = BrowserController()

    with pytest.raises(RuntimeError, match="driver already gone"):
        await browser.__aexit__(None, None, None)
