import discord
from discord import app_commands, ui
from discord.ext import commands

import traceback
import uuid
from typing import List, Tuple

import configs.DefaultConfig as defaultConfig
from embed_menu import EmbedMenu, MenuButton, MenuPage
from embed_menu.constants import STANDARD_REACTIONS, STOP_EMOJI

HELP_SECTIONS: List[Tuple[str, str]] = [
    ("Menu Overview",
     "Menus are embeds split into pages. Only the person who opened a menu can drive it.\n\n"
     "React with the arrows below to move between pages. Reactions from anyone else are removed."),

    ("Reaction Controls",
     "⏮️ jumps to the first page, ◀️ and ▶️ move one page, ⏭️ jumps to the last page.\n\n"
     f"{STOP_EMOJI} stops the menu and leaves the current page in place."),

    ("Button Controls",
     "Some menus use buttons instead of reactions. Buttons can jump straight to a named page "
     "or delete the menu.\n\nTry `/guide` for a button-driven menu."),

    ("Timeouts",
     "A menu stops listening after a period without input. Depending on how it was opened it "
     "is then deleted or its controls are removed.\n\n"
     "In direct messages the menu is left untouched when it times out."),
]

GUIDE_SECTIONS: List[Tuple[str, str, str]] = [
    ("start", "Getting Started", "Use the buttons below to open a topic."),
    ("reactions", "Reactions", "Reaction menus add their controls as reactions on the message."),
    ("buttons", "Buttons", "Button menus wait for a single press and then render the next page."),
]


def build_help_pages() -> List[MenuPage]:
    pages = []
    for i, (title, description) in enumerate(HELP_SECTIONS):
        embed = discord.Embed(title=title, description=description, color=discord.Color.blue())
        embed.set_footer(text=f"Page {i+1}/{len(HELP_SECTIONS)}")
        pages.append(MenuPage(title.lower().replace(" ", "-"), embed, STANDARD_REACTIONS, i))
    return pages


def build_guide_pages() -> List[MenuPage]:
    pages = []
    for i, (name, title, description) in enumerate(GUIDE_SECTIONS):
        embed = discord.Embed(title=title, description=description, color=discord.Color.green())
        buttons = {}
        for target, target_title, _ in GUIDE_SECTIONS:
            if target == name:
                continue
            buttons[f"guide:{target}"] = MenuButton(
                target,
                ui.Button(label=target_title, style=discord.ButtonStyle.blurple, custom_id=f"guide:{target}")
            )
        buttons["guide:delete"] = MenuButton(
            "delete",
            ui.Button(label="Close", style=discord.ButtonStyle.danger, custom_id="guide:delete")
        )
        pages.append(MenuPage(name, embed, None, i, buttons))
    return pages


class MenuAgent(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot
        print(f"MenuAgent Init. Timeout={defaultConfig.MENU_TIMEOUT}s, DeleteOnTimeout={defaultConfig.MENU_DELETE_ON_TIMEOUT}.")

    @app_commands.command(name="help", description="Browse the menu documentation.")
    @app_commands.checks.cooldown(10, 60.0, key=lambda i: i.user.id)
    async def help_slash(self, interaction: discord.Interaction):
        # Reactions cannot be added to ephemeral messages.
        await interaction.response.defer()
        menu = EmbedMenu(interaction, build_help_pages())
        await menu.start(followup=True)

    @app_commands.command(name="guide", description="Open a button-driven guide.")
    @app_commands.checks.cooldown(10, 60.0, key=lambda i: i.user.id)
    async def guide_slash(self, interaction: discord.Interaction):
        menu = EmbedMenu(interaction, build_guide_pages())
        await menu.start(reply=True)

    async def cog_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        if isinstance(error, app_commands.CommandOnCooldown):
            seconds_total = int(error.retry_after)
            message = f"This command is on cooldown. Please try again in {seconds_total} second(s)."
        else:
            error_id = str(uuid.uuid4())[:8]
            print(f"Unhandled command error (ID: {error_id}): {error}")
            traceback.print_exception(type(error), error, error.__traceback__)
            message = f"Something went wrong while opening the menu. (Error ID: {error_id})"

        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)

async def setup(bot: commands.Bot):
    await bot.add_cog(MenuAgent(bot))
