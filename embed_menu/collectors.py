from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, List, Optional

import discord
from discord import ui

from .constants import BUTTONS_PER_ROW, REACTION_EVENT

if TYPE_CHECKING:
    from .menu import EmbedMenu
    from .page import MenuPage

__all__ = (
    'ReactionCollector',
    'ButtonWait',
    'RenderCycle',
)

log = logging.getLogger(__name__)


class ReactionCollector:
    """Streams ``raw_reaction_add`` events for one message until stopped or timed out.

    ``on_collect`` is called synchronously for every payload that passes the filter,
    ``on_end`` is awaited once when the collector times out or is stopped without
    ``silent``. Collected payloads are grouped by emoji in arrival order.
    """

    def __init__(
        self,
        client: discord.Client,
        message: discord.Message,
        *,
        timeout: float,
        on_collect: Callable[[discord.RawReactionActionEvent], None],
        on_end: Callable[[ReactionCollector], Awaitable[None]],
    ) -> None:
        self.client = client
        self.message_id = message.id
        self.timeout = timeout
        self.on_collect = on_collect
        self.on_end = on_end
        self.collected: Dict[str, List[discord.RawReactionActionEvent]] = OrderedDict()
        self.ended = False
        self._task: Optional[asyncio.Task] = None
        self._end_task: Optional[asyncio.Task] = None

    def check(self, payload: discord.RawReactionActionEvent) -> bool:
        if payload.message_id != self.message_id:
            return False
        me = self.client.user
        return me is None or payload.user_id != me.id

    def start(self) -> None:
        self._task = asyncio.create_task(self._run())

    def collected_by(self, user_id: int) -> List[str]:
        return [emoji for emoji, payloads in self.collected.items() if any(p.user_id == user_id for p in payloads)]

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                payload = await self.client.wait_for(REACTION_EVENT, check=self.check, timeout=remaining)
                self.collected.setdefault(str(payload.emoji), []).append(payload)
                self.on_collect(payload)
        except asyncio.TimeoutError:
            pass

        if self.ended:
            return
        self.ended = True
        log.debug('Reaction collector for message %s timed out with %d reaction(s).', self.message_id, len(self.collected))
        await self.on_end(self)

    def stop(self, *, silent: bool) -> None:
        """Stops collecting. A silent stop skips the ``on_end`` cleanup."""
        if self.ended:
            return
        self.ended = True
        task = self._task
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
        if not silent:
            self._end_task = asyncio.create_task(self.on_end(self))


class ButtonWait(ui.View):
    """Renders a page's buttons and records the first press by the authorized user."""

    def __init__(self, menu: EmbedMenu, page: MenuPage) -> None:
        # The bounded wait is driven by the menu so it does not depend on the view store.
        super().__init__(timeout=None)
        self.menu = menu
        self.pressed: Optional[discord.Interaction] = None
        for position, entry in enumerate((page.buttons or {}).values()):
            # Pages are shared between renders, so each view lays out its own copies.
            source = entry.button
            button = ui.Button(
                style=source.style,
                label=source.label,
                disabled=source.disabled,
                custom_id=None if source.url else source.custom_id,
                url=source.url,
                emoji=source.emoji,
                row=position // BUTTONS_PER_ROW,
            )
            button.callback = self.on_press
            self.add_item(button)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return interaction.user.id == self.menu.user.id

    async def on_press(self, interaction: discord.Interaction) -> None:
        if self.pressed is not None:
            return
        self.pressed = interaction
        self.stop()


class RenderCycle:
    """Everything one page render owns: its reaction collector and button waiter."""

    def __init__(self, page: MenuPage) -> None:
        self.page = page
        self.collector: Optional[ReactionCollector] = None
        self.view: Optional[ButtonWait] = None
        self.button_task: Optional[asyncio.Task] = None
        self.attached: List[str] = []
        self.reactions_changed = False
        self.closed = False
        self.silenced = False

    def collected_by(self, user_id: int) -> List[str]:
        if self.collector is None:
            return []
        return self.collector.collected_by(user_id)

    def close(self, *, silent: bool = True) -> None:
        """Tears the cycle down. A silent close skips the end-of-collection cleanup."""
        if self.closed:
            return
        self.closed = True
        self.silenced = silent
        if self.collector is not None:
            self.collector.stop(silent=silent)
        if self.view is not None:
            self.view.stop()
        task = self.button_task
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
