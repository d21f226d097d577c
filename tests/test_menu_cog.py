import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from discord import app_commands

from cogs.MenuCog import GUIDE_SECTIONS, HELP_SECTIONS, MenuAgent, build_guide_pages, build_help_pages
from embed_menu import ActionKind, Directive
from embed_menu.constants import STANDARD_REACTIONS


class TestPageBuilders(unittest.TestCase):
    def test_help_pages(self):
        pages = build_help_pages()

        self.assertEqual(len(pages), len(HELP_SECTIONS))
        self.assertEqual([page.index for page in pages], list(range(len(HELP_SECTIONS))))
        self.assertEqual(pages[0].name, "menu-overview")
        self.assertEqual(pages[-1].content.footer.text, f"Page {len(HELP_SECTIONS)}/{len(HELP_SECTIONS)}")
        for page in pages:
            self.assertEqual(list(page.reactions), list(STANDARD_REACTIONS))
            self.assertIsNone(page.buttons)

    def test_guide_pages_link_to_each_other(self):
        pages = build_guide_pages()
        names = [name for name, _, _ in GUIDE_SECTIONS]

        self.assertEqual([page.name for page in pages], names)
        for page in pages:
            targets = [entry.action.page for entry in page.buttons.values() if entry.action.kind is ActionKind.goto]
            self.assertEqual(sorted(targets), sorted(name for name in names if name != page.name))
            close = page.buttons["guide:delete"]
            self.assertIs(close.action.directive, Directive.delete)
            self.assertEqual(close.button.custom_id, "guide:delete")
            self.assertFalse(page.has_reactions())


class TestMenuAgent(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        with patch("builtins.print"):
            self.cog = MenuAgent(MagicMock())
        self.interaction = MagicMock()
        self.interaction.response.defer = AsyncMock()
        self.interaction.response.send_message = AsyncMock()
        self.interaction.followup.send = AsyncMock()

    @patch("cogs.MenuCog.EmbedMenu")
    async def test_help_defers_then_follows_up(self, menu_cls):
        menu_cls.return_value.start = AsyncMock()

        await self.cog.help_slash.callback(self.cog, self.interaction)

        self.interaction.response.defer.assert_awaited_once_with()
        interaction, pages = menu_cls.call_args.args
        self.assertIs(interaction, self.interaction)
        self.assertEqual(len(pages), len(HELP_SECTIONS))
        menu_cls.return_value.start.assert_awaited_once_with(followup=True)

    @patch("cogs.MenuCog.EmbedMenu")
    async def test_guide_replies(self, menu_cls):
        menu_cls.return_value.start = AsyncMock()

        await self.cog.guide_slash.callback(self.cog, self.interaction)

        self.interaction.response.defer.assert_not_awaited()
        menu_cls.return_value.start.assert_awaited_once_with(reply=True)

    async def test_cooldown_error_message(self):
        self.interaction.response.is_done = MagicMock(return_value=False)
        error = app_commands.CommandOnCooldown(app_commands.Cooldown(1, 60.0), 12.4)

        await self.cog.cog_app_command_error(self.interaction, error)

        message = self.interaction.response.send_message.call_args.args[0]
        self.assertIn("12 second(s)", message)
        self.assertTrue(self.interaction.response.send_message.call_args.kwargs["ephemeral"])

    async def test_unexpected_error_after_response(self):
        self.interaction.response.is_done = MagicMock(return_value=True)
        error = app_commands.AppCommandError("broken")

        with patch("builtins.print"), patch("traceback.print_exception"):
            await self.cog.cog_app_command_error(self.interaction, error)

        self.interaction.followup.send.assert_awaited_once()
        self.assertIn("Error ID", self.interaction.followup.send.call_args.args[0])


if __name__ == "__main__":
    unittest.main()
