from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

import discord
from discord import ui

from .actions import Action
from .constants import BUTTONS_PER_ROW, MAX_BUTTON_ROWS
from .errors import TooManyButtons

__all__ = (
    'MenuButton',
    'MenuPage',
)


class MenuButton:
    """A button rendered on a page together with the action it triggers."""

    __slots__ = ('action', 'button')

    def __init__(self, action: Any, button: ui.Button) -> None:
        self.action: Action = Action.parse(action)
        self.button: ui.Button = button

    @classmethod
    def coerce(cls, value: Union[MenuButton, Mapping[str, Any], Tuple[Any, ui.Button]]) -> MenuButton:
        if isinstance(value, MenuButton):
            return value
        if isinstance(value, Mapping):
            return cls(value['action'], value['button'])
        action, button = value
        return cls(action, button)

    def __repr__(self) -> str:
        return f'<MenuButton action={self.action!r} custom_id={self.button.custom_id!r}>'


class MenuPage:
    """One screen of a menu: an embed plus its reaction and button mappings.

    Pages are immutable once built. ``reactions`` maps emoji keys and ``buttons``
    maps button keys (normally the button's ``custom_id``) to their actions, both
    in the order they are rendered.
    """

    __slots__ = ('_name', '_content', '_reactions', '_buttons', '_index')

    def __init__(
        self,
        name: str,
        content: discord.Embed,
        reactions: Optional[Mapping[str, Any]] = None,
        index: int = 0,
        buttons: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._name = name
        self._content = content
        self._index = index
        self._reactions: Mapping[str, Action] = MappingProxyType(
            {str(key): Action.parse(value) for key, value in (reactions or {}).items()}
        )
        if buttons is None:
            self._buttons: Optional[Mapping[str, MenuButton]] = None
        else:
            limit = BUTTONS_PER_ROW * MAX_BUTTON_ROWS
            if len(buttons) > limit:
                raise TooManyButtons(name, len(buttons), limit)
            self._buttons = MappingProxyType({key: MenuButton.coerce(value) for key, value in buttons.items()})

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any], index: int) -> MenuPage:
        return cls(
            descriptor['name'],
            descriptor['content'],
            descriptor.get('reactions'),
            index,
            descriptor.get('buttons'),
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def content(self) -> discord.Embed:
        return self._content

    @property
    def reactions(self) -> Mapping[str, Action]:
        return self._reactions

    @property
    def buttons(self) -> Optional[Mapping[str, MenuButton]]:
        return self._buttons

    @property
    def index(self) -> int:
        return self._index

    @property
    def title(self) -> Optional[str]:
        return self._content.title

    def has_reactions(self) -> bool:
        return len(self._reactions) > 0

    def has_buttons(self) -> bool:
        return bool(self._buttons)

    def reaction_key(self, emoji: Union[discord.PartialEmoji, discord.Emoji, str]) -> Optional[str]:
        """Resolves a reacted emoji to one of this page's reaction keys.

        Matches by emoji name first, then by emoji id, then by the full emoji string.
        """
        if isinstance(emoji, str):
            return emoji if emoji in self._reactions else None
        for candidate in (emoji.name, emoji.id, str(emoji)):
            if candidate is not None and str(candidate) in self._reactions:
                return str(candidate)
        return None

    def button_key(self, custom_id: Optional[str]) -> Optional[str]:
        """Resolves a pressed component's custom id to one of this page's button keys."""
        if not self._buttons or custom_id is None:
            return None
        if custom_id in self._buttons:
            return custom_id
        for key, entry in self._buttons.items():
            if entry.button.custom_id == custom_id:
                return key
        return None

    def __repr__(self) -> str:
        return f'<MenuPage index={self._index} name={self._name!r}>'
