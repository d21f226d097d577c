import configs.DefaultConfig as defaultConfig

DEFAULT_TIMEOUT = defaultConfig.MENU_TIMEOUT
DEFAULT_DELETE_ON_TIMEOUT = defaultConfig.MENU_DELETE_ON_TIMEOUT
DEFAULT_MENTION = defaultConfig.MENU_MENTION
DEFAULT_KEEP_USER_REACTION_ON_STOP = defaultConfig.MENU_KEEP_USER_REACTION_ON_STOP
DEFAULT_LOADING_MESSAGE = defaultConfig.MENU_LOADING_MESSAGE

# Discord renders at most 5 buttons per action row and 5 rows per message.
BUTTONS_PER_ROW = 5
MAX_BUTTON_ROWS = 5

# Raw reaction events also cover messages outside the client cache (interaction replies).
REACTION_EVENT = "raw_reaction_add"

FIRST_EMOJI = "⏮️"
PREVIOUS_EMOJI = "◀️"
NEXT_EMOJI = "▶️"
LAST_EMOJI = "⏭️"
STOP_EMOJI = "⏹️"

# Ready-made reaction layout for plain sequential paging.
STANDARD_REACTIONS = {
    FIRST_EMOJI: "first",
    PREVIOUS_EMOJI: "previous",
    NEXT_EMOJI: "next",
    LAST_EMOJI: "last",
    STOP_EMOJI: "stop",
}
