from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

if TYPE_CHECKING:
    from .menu import EmbedMenu

__all__ = (
    'ActionKind',
    'Directive',
    'Action',
)

MenuCallback = Callable[['EmbedMenu'], Union[None, Awaitable[Any]]]


class ActionKind(enum.Enum):
    directive = 'directive'
    goto = 'goto'
    callback = 'callback'


class Directive(enum.Enum):
    first = 'first'
    last = 'last'
    previous = 'previous'
    next = 'next'
    stop = 'stop'
    delete = 'delete'


class Action:
    """The effect bound to a reaction emoji or a button.

    Exactly one payload is set, selected by :attr:`kind`:

    - ``ActionKind.directive``: :attr:`directive` is one of the reserved :class:`Directive` values.
    - ``ActionKind.goto``: :attr:`page` names the page to jump to.
    - ``ActionKind.callback``: :attr:`callback` is called with the menu.
    """

    __slots__ = ('_kind', '_directive', '_page', '_callback')

    def __init__(
        self,
        kind: ActionKind,
        *,
        directive: Optional[Directive] = None,
        page: Optional[str] = None,
        callback: Optional[MenuCallback] = None,
    ) -> None:
        if kind is ActionKind.directive and directive is None:
            raise TypeError('directive actions need a directive')
        if kind is ActionKind.goto and page is None:
            raise TypeError('goto actions need a page name')
        if kind is ActionKind.callback and not callable(callback):
            raise TypeError('callback actions need a callable')
        self._kind = kind
        self._directive = directive
        self._page = page
        self._callback = callback

    @classmethod
    def from_directive(cls, directive: Union[Directive, str]) -> Action:
        return cls(ActionKind.directive, directive=Directive(directive))

    @classmethod
    def goto(cls, page: str) -> Action:
        return cls(ActionKind.goto, page=page)

    @classmethod
    def from_callback(cls, callback: MenuCallback) -> Action:
        return cls(ActionKind.callback, callback=callback)

    @classmethod
    def parse(cls, value: Union[Action, Directive, str, MenuCallback]) -> Action:
        """Normalizes the loose forms accepted in page mappings.

        Reserved directive names become directives, any other string is a page
        name, and callables become callbacks.
        """
        if isinstance(value, Action):
            return value
        if isinstance(value, Directive):
            return cls.from_directive(value)
        if isinstance(value, str):
            try:
                return cls.from_directive(value)
            except ValueError:
                return cls.goto(value)
        if callable(value):
            return cls.from_callback(value)
        raise TypeError(f'cannot build a menu action from {value!r}')

    @property
    def kind(self) -> ActionKind:
        return self._kind

    @property
    def directive(self) -> Optional[Directive]:
        return self._directive

    @property
    def page(self) -> Optional[str]:
        return self._page

    @property
    def callback(self) -> Optional[MenuCallback]:
        return self._callback

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return (self._kind, self._directive, self._page, self._callback) == (
            other._kind,
            other._directive,
            other._page,
            other._callback,
        )

    def __hash__(self) -> int:
        return hash((self._kind, self._directive, self._page, self._callback))

    def __repr__(self) -> str:
        if self._kind is ActionKind.directive:
            payload = self._directive.value
        elif self._kind is ActionKind.goto:
            payload = self._page
        else:
            payload = getattr(self._callback, '__qualname__', repr(self._callback))
        return f'<Action {self._kind.value}={payload!r}>'
