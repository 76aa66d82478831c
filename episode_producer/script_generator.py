"""Episode script generation with Claude."""

from datetime import date

import anthropic

from episode_producer.constants import (
    DEFAULT_NEIGHBORHOOD,
    SCRIPT_MAX_TOKENS,
    SCRIPT_MODEL,
    SHOW_NAME,
)
from episode_producer.local_data import format_local_data
from episode_producer.models import LocalData

SYSTEM_PROMPT = f"""You are a comedy writer creating a script for a neighborhood podcast called "{SHOW_NAME}."

THE HOSTS:
- MESCHELLE: Quick-witted, playful humor, asks the follow-up questions everyone is thinking
- KIM: Quick-witted, warm, knows everyone's business, finds joy in the absurdity of everyday life

THE FORMAT:
This is two best friends having coffee/wine and catching up on neighborhood happenings. They've lived here for years and know all the characters. Both have sharp, playful humor - they riff off each other naturally.

CRITICAL RULES:
1. Write as natural dialogue - contractions, interruptions, trailing off...
2. Include laughter and reactions: *laughing*, *snorts*, *gasps*, *sighs*
3. React to absurdity naturally: "Wait, WHAT?", "Oh no...", "Of course he did"
4. Reference recurring neighborhood characters (make them up): Gary with his lawn obsession, Helen who knows everyone's business, the guy who's always working on his car, etc.
5. Use "anyway..." to transition between topics
6. Include at least 3-4 genuine laugh moments per episode
7. Keep it PG-13 - no explicit content but mild gossip is fine
8. End with a callback or running joke

DIALOGUE FORMAT:
Each line must start with "MESCHELLE:" or "KIM:"
Put reactions in asterisks: *laughing*, *snorts*, *sighs*

EXAMPLE:
MESCHELLE: Okay so I saw Gary out there at 6 AM again. With the ruler.
KIM: *laughing* No. Measuring his grass?
MESCHELLE: Measuring. His. Grass. In January.
KIM: That man has issues and I respect it honestly.
MESCHELLE: *snorts* The dedication is unmatched. Anyway, did you see the thing about the new stop sign?
KIM: Oh my god, the Facebook comments on that were WILD.

TARGET LENGTH: About 3-4 minutes when spoken (roughly 450-600 words).

Remember: If there's no laughter, it doesn't work. These women genuinely enjoy each other and find their neighborhood hilarious."""


class ScriptGenerationError(Exception):
    """The model returned nothing usable as a script."""


def build_user_prompt(
    local_data: LocalData,
    location: str,
    topics: list[str],
    neighborhood_name: str = DEFAULT_NEIGHBORHOOD,
    today: date | None = None,
) -> str:
    today = today or date.today()
    formatted = format_local_data(local_data, location, topics, today=today)
    day_label = f"{today.strftime('%A, %B')} {today.day}"

    return f"""Write today's episode of "{SHOW_NAME}" for {day_label}.

The neighborhood: {neighborhood_name} in {location}

Here's what's happening:

{formatted}

Create a funny, natural conversation between Meschelle and Kim covering this content. Make it feel like two friends genuinely catching up and finding humor in everyday neighborhood life.

Remember:
- Start with a casual greeting/check-in
- Cover the weather briefly (find something funny about it)
- Hit the news/topics with genuine reactions
- Include neighborhood character references
- End with a callback or running joke
- MUST include laughter - if it's not funny, rewrite it until it is"""


def generate_script(
    local_data: LocalData,
    location: str,
    topics: list[str],
    neighborhood_name: str = DEFAULT_NEIGHBORHOOD,
    client: anthropic.Anthropic | None = None,
    model: str = SCRIPT_MODEL,
    today: date | None = None,
) -> str:
    """Ask Claude for today's script. Returns the raw script text."""
    client = client if client is not None else anthropic.Anthropic()
    response = client.messages.create(
        model=model,
        max_tokens=SCRIPT_MAX_TOKENS,
        system=SYSTEM_PROMPT,
        messages=[{
            "role": "user",
            "content": build_user_prompt(local_data, location, topics, neighborhood_name, today),
        }],
    )

    for block in response.content:
        if block.type == "text" and block.text.strip():
            return block.text
    raise ScriptGenerationError("No text content in response")


def generate_episode_title(today: date | None = None) -> str:
    """Title like "The Block - Oct 18"."""
    today = today or date.today()
    return f"{SHOW_NAME} - {today.strftime('%b')} {today.day}"
