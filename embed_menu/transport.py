from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import discord

if TYPE_CHECKING:
    from .collectors import ReactionCollector, RenderCycle
    from .menu import EmbedMenu
    from .page import MenuPage

__all__ = (
    'MenuTransport',
    'ChannelTransport',
    'DirectTransport',
)

log = logging.getLogger(__name__)


class MenuTransport:
    """How a menu is rendered into and cleaned up from its conversation.

    Guild channels and interaction replies edit one message in place and may
    strip reactions. Direct messages resend the message on every page and never
    remove reactions.
    """

    is_dm: bool = False

    def mention(self, menu: EmbedMenu) -> Optional[str]:
        return None

    async def render_loading(self, menu: EmbedMenu, embed: discord.Embed, *, reply: bool = False, followup: bool = False) -> None:
        raise NotImplementedError

    async def attach_reactions(self, menu: EmbedMenu, previous: Optional[RenderCycle], page: MenuPage) -> None:
        for emoji in page.reactions:
            await menu.message.add_reaction(emoji)

    async def reject_reaction(self, menu: EmbedMenu, payload: discord.RawReactionActionEvent) -> None:
        pass

    async def on_reactions_end(self, menu: EmbedMenu, cycle: RenderCycle, collector: ReactionCollector) -> None:
        pass

    async def on_buttons_timeout(self, menu: EmbedMenu) -> None:
        pass

    async def on_stop(self, menu: EmbedMenu, cycle: Optional[RenderCycle]) -> None:
        pass


class ChannelTransport(MenuTransport):
    def mention(self, menu: EmbedMenu) -> Optional[str]:
        return menu.user.mention if menu.mention else None

    async def render_loading(self, menu: EmbedMenu, embed: discord.Embed, *, reply: bool = False, followup: bool = False) -> None:
        content = self.mention(menu)
        if menu.message is not None:
            await menu.message.edit(content=content, embed=embed, view=None)
            return

        kwargs: Dict[str, Any] = {'embed': embed}
        if content is not None:
            kwargs['content'] = content

        interaction = menu.interaction
        if reply:
            await interaction.response.send_message(**kwargs)
            menu.message = await interaction.original_response()
        elif followup:
            menu.message = await interaction.followup.send(wait=True, **kwargs)
        else:
            menu.message = await menu.channel.send(**kwargs)

    async def attach_reactions(self, menu: EmbedMenu, previous: Optional[RenderCycle], page: MenuPage) -> None:
        message = menu.message
        keys = list(page.reactions)
        if previous is not None and previous.attached:
            if previous.attached != keys:
                await message.clear_reactions()
            else:
                for emoji in previous.collected_by(menu.user.id):
                    await message.remove_reaction(emoji, menu.user)
        for emoji in keys:
            await message.add_reaction(emoji)

    async def reject_reaction(self, menu: EmbedMenu, payload: discord.RawReactionActionEvent) -> None:
        if menu.message is not None:
            await menu.message.remove_reaction(payload.emoji, discord.Object(id=payload.user_id))

    async def on_reactions_end(self, menu: EmbedMenu, cycle: RenderCycle, collector: ReactionCollector) -> None:
        if menu.message is None:
            return
        if collector.collected:
            if cycle.reactions_changed:
                await menu.clear_reactions()
                cycle.attached = []
            else:
                first = next(iter(collector.collected))
                await menu.message.remove_reaction(first, menu.user)
        elif menu.delete_on_timeout:
            await menu._delete_now()
        else:
            await menu.clear_reactions()
            cycle.attached = []

    async def on_buttons_timeout(self, menu: EmbedMenu) -> None:
        if menu.message is None:
            return
        if menu.delete_on_timeout:
            await menu._delete_now()
        else:
            await menu.message.edit(view=None)

    async def on_stop(self, menu: EmbedMenu, cycle: Optional[RenderCycle]) -> None:
        message = menu.message
        if menu.keep_user_reaction_on_stop:
            if cycle is not None:
                for emoji in cycle.collected_by(menu.user.id):
                    await message.remove_reaction(emoji, menu.user)
        else:
            await menu.clear_reactions()
            if cycle is not None:
                cycle.attached = []
        if cycle is not None and cycle.page.has_buttons():
            await message.edit(view=None)


class DirectTransport(MenuTransport):
    is_dm = True

    async def render_loading(self, menu: EmbedMenu, embed: discord.Embed, *, reply: bool = False, followup: bool = False) -> None:
        # DM menus are resent rather than edited across pages.
        if menu.message is not None:
            await menu.message.delete()
            menu.message = None

        if menu.channel is not None:
            menu.message = await menu.channel.send(embed=embed)
        else:
            menu.message = await menu.user.send(embed=embed)
            menu.channel = menu.message.channel
            log.debug('Opened DM channel %s for menu of user %s.', menu.channel.id, menu.user.id)
