"""Tests for weather/news fetching and prompt formatting."""

from datetime import date
from unittest.mock import MagicMock, patch

import requests

from episode_producer.local_data import (
    format_local_data,
    get_local_data,
    get_local_news,
    get_weather,
    mock_weather,
    parse_news_feed,
)
from episode_producer.models import LocalData, NewsItem, WeatherData

RSS = """<?xml version="1.0"?>
<rss><channel>
  <item><title><![CDATA[Stop sign war escalates]]></title><link>https://x/1</link>
        <source url="https://tribune">Austin Tribune</source></item>
  <item><title>Coffee shop opens</title><link>https://x/2</link></item>
  <item><title>  </title></item>
  <item><title>Third</title></item>
  <item><title>Fourth</title></item>
  <item><title>Fifth</title></item>
  <item><title>Sixth</title></item>
</channel></rss>"""

WEATHER_JSON = {
    "main": {"temp": 71.6, "temp_max": 75.2, "temp_min": 60.4, "humidity": 40},
    "weather": [{"main": "Clear", "description": "clear sky"}],
}


def _response(json_data=None, text="", status_ok=True):
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.text = text
    if not status_ok:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError("500")
    return resp


# --- Weather ---

def test_mock_weather_seasons():
    assert mock_weather(date(2026, 1, 10)).condition == "Cloudy"
    assert mock_weather(date(2026, 7, 10)).condition == "Sunny"
    assert mock_weather(date(2026, 10, 18)).condition == "Partly Cloudy"


@patch("episode_producer.local_data.requests.get")
def test_get_weather(mock_get):
    mock_get.return_value = _response(WEATHER_JSON)
    weather = get_weather("Austin, TX", api_key="k")
    assert weather == WeatherData(temp=72, condition="Clear", high=75, low=60, humidity=40,
                                  description="clear sky")
    assert mock_get.call_args.kwargs["params"]["units"] == "imperial"


@patch("episode_producer.local_data.requests.get")
def test_get_weather_without_key_uses_mock(mock_get, monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    assert isinstance(get_weather("Austin, TX"), WeatherData)
    mock_get.assert_not_called()


@patch("episode_producer.local_data.requests.get")
def test_get_weather_http_error_falls_back(mock_get, caplog):
    mock_get.return_value = _response(status_ok=False)
    weather = get_weather("Austin, TX", api_key="k")
    assert weather == mock_weather()
    assert "using mock weather" in caplog.text


@patch("episode_producer.local_data.requests.get")
def test_get_weather_bad_payload_falls_back(mock_get):
    mock_get.return_value = _response({"cod": 404})
    assert get_weather("Nowhere", api_key="k") == mock_weather()


# --- News ---

def test_parse_news_feed():
    items = parse_news_feed(RSS)
    assert len(items) == 5
    assert items[0] == NewsItem(title="Stop sign war escalates", source="Austin Tribune", url="https://x/1")
    assert items[1].source == "Local News"
    assert "  " not in [i.title for i in items]


@patch("episode_producer.local_data.requests.get")
def test_get_local_news(mock_get):
    mock_get.return_value = _response(text=RSS)
    items = get_local_news("Austin, TX")
    assert items[0].title == "Stop sign war escalates"
    assert mock_get.call_args.kwargs["params"]["q"] == "Austin, TX local news"


@patch("episode_producer.local_data.requests.get")
def test_get_local_news_network_error(mock_get):
    mock_get.side_effect = requests.exceptions.ConnectionError("offline")
    items = get_local_news("Austin, TX")
    assert "Austin, TX" in items[0].title


@patch("episode_producer.local_data.requests.get")
def test_get_local_news_bad_xml(mock_get):
    mock_get.return_value = _response(text="<rss><channel>")
    assert len(get_local_news("Austin, TX")) == 3


@patch("episode_producer.local_data.requests.get")
def test_get_local_news_empty_feed(mock_get):
    mock_get.return_value = _response(text="<rss><channel></channel></rss>")
    assert len(get_local_news("Austin, TX")) == 3


@patch("episode_producer.local_data.get_local_news")
@patch("episode_producer.local_data.get_weather")
def test_get_local_data(mock_weather_fn, mock_news_fn):
    mock_weather_fn.return_value = mock_weather()
    mock_news_fn.return_value = [NewsItem(title="t", source="s")]
    data = get_local_data("Austin, TX")
    assert data.weather == mock_weather()
    assert data.news[0].title == "t"
    assert data.generated_at


# --- Formatting ---

def test_format_local_data():
    data = LocalData(
        weather=WeatherData(temp=65, condition="Rain", high=70, low=55, humidity=80, description="light rain"),
        news=[NewsItem(title="Stop sign", source="Tribune")],
        generated_at="now",
    )
    text = format_local_data(data, "Austin, TX", ["Gary's lawn"], today=date(2026, 10, 18))
    assert "Location: Austin, TX" in text
    assert "Date: Sunday, October 18, 2026" in text
    assert "- Current: 65°F, Rain" in text
    assert "- Stop sign (Tribune)" in text
    assert "NEIGHBORHOOD TOPICS (from residents):\n- Gary's lawn" in text


def test_format_local_data_sparse():
    data = LocalData(weather=None, news=[], generated_at="now")
    text = format_local_data(data, "Austin, TX", [], today=date(2026, 10, 18))
    assert "WEATHER" not in text
    assert "LOCAL NEWS" not in text
    assert "NEIGHBORHOOD TOPICS" not in text
