import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord

USER_ID = 1001
OTHER_USER_ID = 2002
BOT_ID = 9009
MESSAGE_ID = 5005


class FakeClient:
    """Stands in for discord.Client: reaction events are pushed onto a queue."""

    def __init__(self):
        self.user = MagicMock(id=BOT_ID)
        self.reactions = asyncio.Queue()
        self.wait_for_events = []

    async def wait_for(self, event, *, check=None, timeout=None):
        self.wait_for_events.append(event)

        async def next_match():
            while True:
                payload = await self.reactions.get()
                if check is None or check(payload):
                    return payload

        return await asyncio.wait_for(next_match(), timeout)


def make_message(message_id=MESSAGE_ID):
    message = MagicMock()
    message.id = message_id
    message.edit = AsyncMock()
    message.delete = AsyncMock()
    message.add_reaction = AsyncMock()
    message.remove_reaction = AsyncMock()
    message.clear_reactions = AsyncMock()
    message.channel = MagicMock(id=777)
    return message


def make_interaction(channel_type=discord.ChannelType.text, with_channel=True):
    """Returns an interaction mock and the message every send path resolves to."""
    message = make_message()
    interaction = MagicMock()
    interaction.client = FakeClient()
    interaction.user = MagicMock(id=USER_ID, mention=f"<@{USER_ID}>")
    interaction.user.send = AsyncMock(return_value=message)
    if with_channel:
        interaction.channel = MagicMock(type=channel_type)
        interaction.channel.send = AsyncMock(return_value=message)
    else:
        interaction.channel = None
    interaction.response.send_message = AsyncMock()
    interaction.original_response = AsyncMock(return_value=message)
    interaction.followup.send = AsyncMock(return_value=message)
    return interaction, message


def make_reaction(emoji, user_id=USER_ID, message_id=MESSAGE_ID):
    return SimpleNamespace(message_id=message_id, user_id=user_id, emoji=discord.PartialEmoji(name=emoji))


def make_press(custom_id, user_id=USER_ID):
    interaction = MagicMock()
    interaction.user = MagicMock(id=user_id)
    interaction.data = {"custom_id": custom_id}
    interaction.response.defer = AsyncMock()
    return interaction


def last_edit(message):
    return message.edit.call_args.kwargs


async def settle(rounds=50):
    """Lets spawned menu tasks run to completion against the immediate mocks."""
    for _ in range(rounds):
        await asyncio.sleep(0)
