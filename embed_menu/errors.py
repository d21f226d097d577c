from __future__ import annotations

__all__ = (
    'MenuError',
    'EmptyPageList',
    'PageNotFound',
    'PageIndexOutOfRange',
    'TooManyButtons',
)


class MenuError(Exception):
    pass


class EmptyPageList(MenuError):
    def __init__(self) -> None:
        super().__init__('A menu needs at least one page.')


class PageNotFound(MenuError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Page "{name}" not found!')


class PageIndexOutOfRange(MenuError, IndexError):
    def __init__(self, index: int, page_count: int) -> None:
        self.index = index
        self.page_count = page_count
        super().__init__(f'Page index {index} is out of range for a menu with {page_count} page(s).')


class TooManyButtons(MenuError, ValueError):
    def __init__(self, name: str, count: int, limit: int) -> None:
        self.name = name
        self.count = count
        self.limit = limit
        super().__init__(f'Page "{name}" has {count} buttons, a message holds at most {limit}.')
