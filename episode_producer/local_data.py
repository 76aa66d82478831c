"""Weather and local headlines for the episode prompt, with mock fallbacks."""

import logging
import os
import xml.etree.ElementTree as ET
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

import requests

from episode_producer.constants import HTTP_TIMEOUT, MAX_NEWS_ITEMS, NEWS_RSS_URL, WEATHER_URL
from episode_producer.models import LocalData, NewsItem, WeatherData

logger = logging.getLogger(__name__)


def mock_weather(today: date | None = None) -> WeatherData:
    """Plausible seasonal weather when the real API isn't available."""
    month = (today or date.today()).month
    if month == 12 or month <= 3:
        return WeatherData(temp=35, condition="Cloudy", high=40, low=28, humidity=60,
                           description="overcast clouds")
    if 6 <= month <= 9:
        return WeatherData(temp=85, condition="Sunny", high=90, low=72, humidity=60,
                           description="clear sky")
    return WeatherData(temp=65, condition="Partly Cloudy", high=70, low=55, humidity=60,
                       description="scattered clouds")


def mock_news(location: str) -> list[NewsItem]:
    return [
        NewsItem(title=f"City council debates new parking regulations in downtown {location}",
                 source="Local Tribune"),
        NewsItem(title="Local school district announces snow day policy for winter",
                 source="Education Weekly"),
        NewsItem(title="New coffee shop opening draws crowds on Main Street",
                 source="Business Journal"),
    ]


def get_weather(location: str, api_key: str | None = None) -> WeatherData:
    """Current conditions from OpenWeather (imperial units)."""
    api_key = api_key or os.getenv("OPENWEATHER_API_KEY")
    if not api_key:
        logger.info("No OpenWeather API key, using mock weather")
        return mock_weather()

    try:
        response = requests.get(
            WEATHER_URL,
            params={"q": location, "units": "imperial", "appid": api_key},
            timeout=HTTP_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
        return WeatherData(
            temp=round(data["main"]["temp"]),
            condition=data["weather"][0]["main"],
            high=round(data["main"]["temp_max"]),
            low=round(data["main"]["temp_min"]),
            humidity=data["main"]["humidity"],
            description=data["weather"][0]["description"],
        )
    except requests.exceptions.RequestException as e:
        logger.warning("Weather request failed for %s: %s; using mock weather", location, e)
    except (ValueError, KeyError, IndexError) as e:
        logger.warning("Unexpected weather payload for %s: %s; using mock weather", location, e)
    return mock_weather()


def parse_news_feed(xml_text: str, limit: int = MAX_NEWS_ITEMS) -> list[NewsItem]:
    """Extract (title, source, link) from an RSS document."""
    root = ET.fromstring(xml_text)
    items = []
    for item in root.iter("item"):
        title = (item.findtext("title") or "").strip()
        if not title:
            continue
        source = (item.findtext("source") or "").strip() or "Local News"
        url = (item.findtext("link") or "").strip()
        items.append(NewsItem(title=title, source=source, url=url))
        if len(items) >= limit:
            break
    return items


def get_local_news(location: str) -> list[NewsItem]:
    """Top local headlines from the Google News RSS search."""
    try:
        response = requests.get(
            NEWS_RSS_URL,
            params={"q": f"{location} local news", "hl": "en-US", "gl": "US", "ceid": "US:en"},
            timeout=HTTP_TIMEOUT,
        )
        response.raise_for_status()
        items = parse_news_feed(response.text)
    except requests.exceptions.RequestException as e:
        logger.warning("News request failed for %s: %s; using mock headlines", location, e)
        return mock_news(location)
    except ET.ParseError as e:
        logger.warning("Could not parse news feed for %s: %s; using mock headlines", location, e)
        return mock_news(location)

    return items or mock_news(location)


def get_local_data(location: str) -> LocalData:
    """Fetch weather and news side by side."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        weather = executor.submit(get_weather, location)
        news = executor.submit(get_local_news, location)
        return LocalData(
            weather=weather.result(),
            news=news.result(),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )


def format_local_data(
    data: LocalData,
    location: str,
    topics: list[str],
    today: date | None = None,
) -> str:
    """Render local data as the "what's happening" block of the prompt."""
    today = today or date.today()
    lines = [
        f"Location: {location}",
        f"Date: {today.strftime('%A, %B')} {today.day}, {today.year}",
        "",
    ]

    if data.weather:
        w = data.weather
        lines += [
            "WEATHER:",
            f"- Current: {w.temp}°F, {w.condition}",
            f"- High: {w.high}°F, Low: {w.low}°F",
            f"- {w.description}",
            "",
        ]

    if data.news:
        lines.append("LOCAL NEWS:")
        lines += [f"- {item.title} ({item.source})" for item in data.news]
        lines.append("")

    if topics:
        lines.append("NEIGHBORHOOD TOPICS (from residents):")
        lines += [f"- {topic}" for topic in topics]

    return "\n".join(lines)
