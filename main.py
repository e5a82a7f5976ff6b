# main.py
"""Main entry point for the trading journal."""
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.settings import Settings
from src.journal import JournalManager, TimeFilter
from src.notifications import AlertFormatter, DailyScheduler, TelegramNotifier


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def create_data_dirs(settings: Settings) -> None:
    """Create required data directories if they don't exist."""
    Path(settings.journal.data_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Data directories verified")


def print_startup_banner(settings: Settings) -> None:
    """Print system startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Version: {settings.system.version}")
    logger.info(f"Data directory: {settings.journal.data_dir}")
    logger.info("=" * 60)


def load_and_validate_config() -> Settings:
    """Load and validate configuration.

    Returns:
        Settings object loaded from YAML.

    Raises:
        SystemExit: If config file missing or YAML parsing fails.
    """
    load_dotenv()
    logger.info("✓ Loaded environment variables")

    config_path = Path("config/settings.yaml")
    if not config_path.exists():
        logger.error("config/settings.yaml not found")
        sys.exit(1)

    try:
        settings = Settings.from_yaml(config_path)
        logger.info("✓ Settings loaded from config/settings.yaml")
    except Exception as e:
        logger.error(f"Failed to parse settings.yaml: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.system.log_level)
    create_data_dirs(settings)

    return settings


async def initialize_notifier(settings: Settings) -> TelegramNotifier:
    """Initialize the Telegram notifier.

    Notifications are optional: a missing token leaves the notifier disabled.
    """
    notifier = TelegramNotifier(settings=settings.notifications, formatter=AlertFormatter())
    await notifier.start()
    if notifier.is_enabled:
        logger.info("✓ Telegram notifier ready")
    else:
        logger.warning("Telegram not configured - notifications disabled")
        logger.warning("Set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID to enable")
    return notifier


async def initialize_journal(
    settings: Settings, notifier: TelegramNotifier
) -> JournalManager:
    """Create the journal manager and load persisted documents."""
    journal = JournalManager(settings=settings.journal, notifier=notifier)
    await journal.load()
    logger.info("✓ JournalManager initialized")
    return journal


def print_journal_summary(journal: JournalManager) -> None:
    """Log statistics for every time filter."""
    for time_filter in TimeFilter:
        stats = journal.get_statistics(time_filter)
        logger.info(
            f"{time_filter.value:>5}: {stats.total_trades} trades, "
            f"PnL {stats.total_pnl:+,.2f}, win rate {stats.win_rate:.1f}%, "
            f"PF {stats.profit_factor_display()}, avg R:R {stats.avg_risk_reward:.2f}"
        )

    stats = journal.get_statistics(TimeFilter.ALL)
    logger.info(
        f"Wallet: {stats.wallet_balance:,.2f} "
        f"(income {stats.total_income:,.2f}, expense {stats.total_expense:,.2f})"
    )

    next_objective = journal.get_next_objective()
    if next_objective is not None:
        logger.info(
            f"Next objective: {next_objective.title} "
            f"({next_objective.progress_ratio:.0%} of {next_objective.target_value:,.2f})"
        )


async def run(settings: Settings) -> None:
    """Load the journal, report its state and run the daily messages.

    Without Telegram there is nothing to schedule and run returns once the
    summary is logged.
    """
    print_startup_banner(settings)

    notifier = await initialize_notifier(settings)
    scheduler = None
    try:
        journal = await initialize_journal(settings, notifier)
        print_journal_summary(journal)

        if notifier.is_enabled:
            scheduler = DailyScheduler(notifier, settings.notifications, journal)
            await scheduler.start()
            await scheduler.wait()
    finally:
        if scheduler is not None:
            await scheduler.stop()
        await notifier.stop()


def main() -> None:
    settings = load_and_validate_config()
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Shutdown requested")


if __name__ == "__main__":
    main()
