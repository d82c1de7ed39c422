"""Command-line entry point for the face duel client."""

import asyncio
import logging
import sys

from face_duel.app_logging import configure_logging
from face_duel.config import Settings
from face_duel.containers import AppContainer, build_container
from face_duel.errors import ExtractorLoadError
from face_duel.services.roster import format_roster

_logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: join <name> | shoot | players | quit"


async def handle_command(container: AppContainer, line: str) -> bool:
    """Dispatch one input line; return False when the user wants to quit."""
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    session = container.game_session
    if command in {"quit", "exit"}:
        return False
    if command == "join":
        outcome = await session.join(argument)
        _logger.debug("join outcome: %s", outcome.value)
    elif command in {"shoot", "fire"}:
        outcome = await session.shoot()
        _logger.debug("shoot outcome: %s", outcome.value)
    elif command == "players":
        container.presenter.log(f"Players: {format_roster(container.roster.entries)}")
    elif command:
        container.presenter.log(HELP_TEXT)
    return True


async def run(container: AppContainer) -> None:
    """Run event processing, reconciliation and the input loop together."""
    background = [asyncio.create_task(container.game_session.process_events())]
    if container.reconciler is not None:
        background.append(asyncio.create_task(container.reconciler.run()))
    try:
        await container.game_session.connect()
        container.presenter.log(HELP_TEXT)
        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            if not await handle_command(container, line):
                break
    finally:
        await container.close_resources()
        for task in background:
            task.cancel()
        await asyncio.gather(*background, return_exceptions=True)


def main() -> None:
    """Build the client from the environment and run it."""
    try:
        settings = Settings()
        configure_logging(settings.log_level)
        container = build_container(settings)
    except (ExtractorLoadError, ValueError) as exc:
        print(f"Face Duel: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    try:
        asyncio.run(run(container))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
