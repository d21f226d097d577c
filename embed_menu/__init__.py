"""
Embed Menu
~~~~~~~~~~

Paginated embed menus for discord.py, driven by reactions and buttons
and restricted to the user who opened them.
"""

__version__ = '1.0.0'

from .actions import *
from .collectors import *
from .errors import *
from .menu import *
from .page import *
from .transport import *
