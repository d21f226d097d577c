import configs.DefaultConfig as defaultConfig
import asyncio
import discord
from discord.ext import commands
import signal
import platform

# --- Intents Setup ---
# Default intents include guild and DM reactions, which menus listen to.
intents = discord.Intents.default()
intents.message_content = True

# --- Bot Initialization ---
bot = commands.Bot(command_prefix="!", intents=intents, help_command=None)

# --- Event: Bot Ready ---
@bot.event
async def on_ready():
    print(f"Bot is online as {bot.user.name} (ID: {bot.user.id})")
    print("Attempting to sync application (slash) commands...")
    try:
        synced = await bot.tree.sync()
        print(f"Synced {len(synced)} application commands globally.")
    except discord.HTTPException as e:
        print(f"Failed to sync application commands: {e}")
    print("Bot setup complete and ready for commands.")

# --- Main asynchronous function to setup and run the bot ---
async def main():
    if not defaultConfig.DISCORD_SDK:
        print("CRITICAL ERROR: DISCORD_SDK is missing from the environment.")
        return

    print("Loading bot cogs...")
    await bot.load_extension("cogs.MenuCog")
    print("MenuCog loaded successfully.")

    # Handle graceful shutdown on signals
    if platform.system() != "Windows":
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda: asyncio.create_task(bot.close()))

    try:
        print("Starting bot...")
        async with bot:
            await bot.start(defaultConfig.DISCORD_SDK)
    finally:
        print("Bot shut down. Exiting.")

# --- Run the bot ---
if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Initiating shutdown.")
    except Exception:
        import traceback
        print(f"An error occurred during bot operation:")
        traceback.print_exc()
