"""All magic numbers and configuration constants."""

import os

SHOW_NAME = "The Block"
BATCH_SIZE = 5                      # concurrent TTS requests per batch
WORDS_PER_MINUTE = 150              # speaking rate used by the duration estimate
TTS_MODEL = os.getenv("OPENAI_TTS_MODEL", "tts-1-hd")
AUDIO_FORMAT = "mp3"                # every segment must share this encoding
AUDIO_CONTENT_TYPE = "audio/mpeg"
EDGE_TTS_RATE = "+0%"               # edge-tts speech rate
SCRIPT_MODEL = os.getenv("CLAUDE_SCRIPT_MODEL", "claude-sonnet-4-20250514")
SCRIPT_MAX_TOKENS = 2000
DEFAULT_LOCATION = "Austin, TX"
DEFAULT_NEIGHBORHOOD = "the neighborhood"
MAX_NEWS_ITEMS = 5                  # headlines pulled from the news feed
HTTP_TIMEOUT = 10                   # seconds, weather/news requests
WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
NEWS_RSS_URL = "https://news.google.com/rss/search"
EPISODE_LIST_LIMIT = 30
VOICE_DEMO_PANGRAM = "The quick brown fox jumps over the lazy dog."
OUTPUT_DIR = "output"
VERSION = "0.1.0"
