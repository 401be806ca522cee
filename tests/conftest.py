import pytest

from clubfund.config import get_settings


@pytest.fixture(autouse=True)
def club_settings(monkeypatch):
    monkeypatch.setenv("TZ", "Asia/Ho_Chi_Minh")
    monkeypatch.setenv("CURRENCY_SYMBOL", "đ")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
