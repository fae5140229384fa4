import logging

import discord

from rss_shorts import GenerationError, ShortGenerator, ShortPayload
from rss_shorts.config import Settings, load_settings

log = logging.getLogger("discord_bot")

COMMAND = "!short"
MESSAGE_LIMIT = 2000


def format_payload(payload: ShortPayload) -> str:
    """Render a payload as a single Discord message (at most 2000 characters)."""
    response = f"🎬 **{payload.title}**\n\n"
    response += f"{payload.script}\n\n"
    response += f"🖼️ Thumbnail: *{payload.thumbnail_text}*\n"
    response += " ".join(payload.hashtags) + "\n\n"
    for prompt in payload.visuals:
        response += f"- {prompt}\n"
    if payload.items:
        response += "\n"
    for item in payload.items:
        response += f"*{item.source} - {item.published_at.strftime('%Y-%m-%d %H:%M')}* <{item.link}>\n"

    # Keep the message under Discord's length limit
    if len(response) > MESSAGE_LIMIT:
        response = response[: MESSAGE_LIMIT - 3] + "..."
    return response


def build_client(settings: Settings) -> discord.Client:
    intents = discord.Intents.default()
    intents.message_content = True  # needed to read commands

    client = discord.Client(intents=intents)
    generator = ShortGenerator.from_settings(settings)

    @client.event
    async def on_ready():
        log.info("Logged in as %s", client.user)

    @client.event
    async def on_message(message):
        # Ignore the bot's own messages
        if message.author == client.user:
            return
        if not message.content.startswith(COMMAND):
            return

        await message.channel.send("Fetching the latest tech & space news...")
        try:
            payload = await generator.generate()
        except GenerationError as e:
            await message.channel.send(f"Could not build a short: {e.message}")
            return
        await message.channel.send(format_payload(payload))

    return client


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    if not settings.discord_token:
        raise SystemExit("DISCORD_BOT_TOKEN is not set. Check your .env file.")
    build_client(settings).run(settings.discord_token, log_handler=None)


if __name__ == "__main__":
    main()
