from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Coroutine, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import discord

from .actions import Action, ActionKind, Directive
from .collectors import ButtonWait, ReactionCollector, RenderCycle
from .constants import (
    DEFAULT_DELETE_ON_TIMEOUT,
    DEFAULT_KEEP_USER_REACTION_ON_STOP,
    DEFAULT_LOADING_MESSAGE,
    DEFAULT_MENTION,
    DEFAULT_TIMEOUT,
)
from .errors import EmptyPageList, PageIndexOutOfRange, PageNotFound
from .page import MenuPage
from .transport import ChannelTransport, DirectTransport, MenuTransport

__all__ = (
    'PageChange',
    'MenuListener',
    'EmbedMenu',
)

log = logging.getLogger(__name__)

_DM_CHANNEL_TYPES = (discord.ChannelType.private, discord.ChannelType.group)


class PageChange:
    __slots__ = ('old_index', 'old_page', 'new_index', 'new_page')

    def __init__(self, old_index: int, old_page: MenuPage, new_index: int, new_page: MenuPage) -> None:
        self.old_index = old_index
        self.old_page = old_page
        self.new_index = new_index
        self.new_page = new_page

    def __repr__(self) -> str:
        return f'<PageChange {self.old_index} -> {self.new_index}>'


class MenuListener:
    """Receives the page transitions of a menu.

    Both hooks may be plain methods or coroutines. They run while the transition
    is in progress, so they must not await another transition on the same menu.
    """

    def on_page_changing(self, change: PageChange) -> Any:
        pass

    def on_page_changed(self, change: PageChange) -> Any:
        pass


class EmbedMenu:
    """An embed paginated by reactions and buttons, restricted to one user.

    Parameters
    -----------
    interaction: :class:`discord.Interaction`
        The command invocation. Supplies the authorized user, the channel and
        the reply/follow-up webhooks.
    pages: Sequence[Union[:class:`MenuPage`, Mapping]]
        The pages in order. Mappings with ``name``, ``content``, ``reactions``
        and ``buttons`` keys are turned into pages indexed by position.
    timeout: :class:`float`
        Seconds each page waits for input before its timeout cleanup runs.
    delete_on_timeout: :class:`bool`
        Whether an idle menu deletes its message instead of stripping its controls.
    mention: :class:`bool`
        Whether to mention the user above the embed (channels only).
    keep_user_reaction_on_stop: :class:`bool`
        Whether :meth:`stop` only removes the user's reactions rather than all of them.
    loading_message: Optional[:class:`str`]
        Description shown while a page is being set up.
    listeners: Optional[Iterable[:class:`MenuListener`]]
        Observers of page transitions.
    """

    def __init__(
        self,
        interaction: discord.Interaction,
        pages: Sequence[Union[MenuPage, Mapping[str, Any]]],
        timeout: float = DEFAULT_TIMEOUT,
        delete_on_timeout: bool = DEFAULT_DELETE_ON_TIMEOUT,
        mention: bool = DEFAULT_MENTION,
        keep_user_reaction_on_stop: bool = DEFAULT_KEEP_USER_REACTION_ON_STOP,
        loading_message: Optional[str] = None,
        *,
        listeners: Optional[Iterable[MenuListener]] = None,
    ) -> None:
        pages = list(pages)
        if not pages:
            raise EmptyPageList()

        self.interaction = interaction
        self.client: discord.Client = interaction.client
        self.channel = interaction.channel
        self.user = interaction.user
        self.timeout = timeout
        self.delete_on_timeout = delete_on_timeout
        self.mention = mention
        self.keep_user_reaction_on_stop = keep_user_reaction_on_stop
        self.loading_message = loading_message or DEFAULT_LOADING_MESSAGE

        self.is_dm: bool = self.channel is None or self.channel.type in _DM_CHANNEL_TYPES
        self.transport: MenuTransport = DirectTransport() if self.is_dm else ChannelTransport()

        self._pages: Tuple[MenuPage, ...] = tuple(
            page if isinstance(page, MenuPage) else MenuPage.from_descriptor(page, i) for i, page in enumerate(pages)
        )
        self._page_index = 0

        self.message: Optional[discord.Message] = None
        self.data: Dict[str, Any] = {}

        self._cycle: Optional[RenderCycle] = None
        self._listeners: List[MenuListener] = list(listeners or ())
        self._lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return f'<EmbedMenu user={self.user.id} page={self._page_index}/{len(self._pages)} dm={self.is_dm}>'

    @property
    def pages(self) -> Tuple[MenuPage, ...]:
        return self._pages

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def current_page(self) -> MenuPage:
        return self._pages[self._page_index]

    def add_listener(self, listener: MenuListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: MenuListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def resolve_index(self, page: Union[int, str]) -> int:
        """Turns a page name or position into a validated position.

        Raises
        -------
        PageNotFound
            No page has the given name.
        PageIndexOutOfRange
            The position is outside the page list.
        """
        if isinstance(page, str):
            for index, candidate in enumerate(self._pages):
                if candidate.name == page:
                    return index
            raise PageNotFound(page)
        if not 0 <= page < len(self._pages):
            raise PageIndexOutOfRange(page, len(self._pages))
        return page

    async def start(self, *, send: bool = False, reply: bool = False, followup: bool = False) -> None:
        """|coro|

        Renders the first page. ``reply`` answers the interaction, ``followup``
        follows up an interaction that was already deferred or answered, and
        otherwise (``send``) the menu is posted to the channel.
        """
        await self.set_page(0, reply=reply, followup=followup)

    async def set_page(self, page: Union[int, str] = 0, *, reply: bool = False, followup: bool = False) -> None:
        """|coro|

        Switches the menu to ``page`` (a position or a page name) and renders it.

        ``reply`` and ``followup`` only matter for the first render of a menu
        outside of DMs.
        """
        async with self._lock:
            index = self.resolve_index(page)
            target = self._pages[index]
            previous_index = self._page_index
            await self._emit('on_page_changing', PageChange(previous_index, self.current_page, index, target))

            self._page_index = index
            log.debug('Menu of user %s switching page %s -> %s (%r).', self.user.id, previous_index, index, target.name)

            loading = discord.Embed(title=target.title, description=self.loading_message)
            await self.transport.render_loading(self, loading, reply=reply, followup=followup)

            previous = self._cycle
            if previous is not None:
                previous.close(silent=True)
            cycle = self._cycle = RenderCycle(target)

            await self.transport.attach_reactions(self, previous, target)
            if target.has_reactions():
                cycle.attached = list(target.reactions)
                self._start_collector(cycle)

            view = None
            if target.has_buttons():
                view = cycle.view = ButtonWait(self, target)

            await self.message.edit(content=self.transport.mention(self), embed=target.content, view=view)

            if view is not None:
                cycle.button_task = self._spawn(self._await_buttons(cycle))

        await self._emit('on_page_changed', PageChange(previous_index, self._pages[previous_index], index, target))

    async def stop(self) -> None:
        """|coro|

        Stops listening for input and strips the menu's controls.
        Does nothing if the menu is not running.
        """
        async with self._lock:
            cycle = self._cycle
            if cycle is None or cycle.closed:
                return
            cycle.close(silent=True)
            if self.message is not None:
                await self.transport.on_stop(self, cycle)

    async def delete(self) -> None:
        """|coro|

        Stops listening for input and deletes the menu's message.
        """
        async with self._lock:
            await self._delete_now()

    async def clear_reactions(self) -> None:
        if self.message is not None and not self.is_dm:
            await self.message.clear_reactions()

    async def on_action_error(self, exc: Exception) -> None:
        """|coro|

        Called when handling a reaction or button press raised.
        The default behaviour is to log the exception.
        """
        log.exception('Unhandled exception while handling input for menu of user %s.', self.user.id, exc_info=exc)

    async def _delete_now(self) -> None:
        cycle, self._cycle = self._cycle, None
        if cycle is not None:
            cycle.close(silent=True)
        if self.message is not None:
            await self.message.delete()
            self.message = None

    async def _emit(self, hook: str, change: PageChange) -> None:
        for listener in list(self._listeners):
            callback = getattr(listener, hook, None)
            if callback is not None:
                await discord.utils.maybe_coroutine(callback, change)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(self._guard(coro))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception as exc:
            await self.on_action_error(exc)

    def _target_index(self, action: Action) -> Optional[int]:
        if action.kind is ActionKind.goto:
            return self.resolve_index(action.page)
        directive = action.directive
        if directive is Directive.first:
            return 0
        if directive is Directive.last:
            return len(self._pages) - 1
        if directive is Directive.previous:
            return self._page_index - 1 if self._page_index > 0 else None
        if directive is Directive.next:
            return self._page_index + 1 if self._page_index < len(self._pages) - 1 else None
        return None

    async def _dispatch(self, action: Action) -> None:
        if action.kind is ActionKind.callback:
            await discord.utils.maybe_coroutine(action.callback, self)
            return
        if action.directive is Directive.stop:
            await self.stop()
            return
        if action.directive is Directive.delete:
            await self.delete()
            return
        index = self._target_index(action)
        # previous/next at the edges of the menu do nothing
        if index is not None:
            await self.set_page(index)

    # Reactions

    def _start_collector(self, cycle: RenderCycle) -> None:
        collector = ReactionCollector(
            self.client,
            self.message,
            timeout=self.timeout,
            on_collect=functools.partial(self._on_reaction, cycle),
            on_end=functools.partial(self._on_reactions_end, cycle),
        )
        cycle.collector = collector
        collector.start()

    def _on_reaction(self, cycle: RenderCycle, payload: discord.RawReactionActionEvent) -> None:
        self._spawn(self._handle_reaction(cycle, payload))

    async def _handle_reaction(self, cycle: RenderCycle, payload: discord.RawReactionActionEvent) -> None:
        if cycle.closed:
            return
        page = cycle.page
        key = page.reaction_key(payload.emoji)
        if payload.user_id != self.user.id or key is None:
            await self.transport.reject_reaction(self, payload)
            return

        action = page.reactions[key]
        if action.kind is ActionKind.callback:
            cycle.reactions_changed = True
            await discord.utils.maybe_coroutine(action.callback, self)
            return

        index = self._target_index(action)
        if index is not None:
            cycle.reactions_changed = list(self._pages[index].reactions) != cycle.attached
        await self._dispatch(action)

    async def _on_reactions_end(self, cycle: RenderCycle, collector: ReactionCollector) -> None:
        try:
            async with self._lock:
                # A closed cycle still cleans up unless it was closed silently.
                if cycle is not self._cycle or cycle.silenced:
                    return
                await self.transport.on_reactions_end(self, cycle, collector)
        except Exception as exc:
            await self.on_action_error(exc)

    # Buttons

    async def _await_buttons(self, cycle: RenderCycle) -> None:
        view = cycle.view
        try:
            await asyncio.wait_for(view.wait(), timeout=self.timeout)
        except asyncio.TimeoutError:
            view.stop()
            async with self._lock:
                if cycle is not self._cycle or cycle.closed:
                    return
                log.debug('Button wait for menu of user %s timed out.', self.user.id)
                await self.transport.on_buttons_timeout(self)
            return

        interaction = view.pressed
        if interaction is None or cycle.closed:
            return
        await interaction.response.defer()

        key = cycle.page.button_key((interaction.data or {}).get('custom_id'))
        if key is None or interaction.user.id != self.user.id:
            return
        await self._dispatch(cycle.page.buttons[key].action)
