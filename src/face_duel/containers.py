"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from face_duel.adapters.console_presenter import ConsolePresenter
from face_duel.adapters.extractor_loader import load_extractor
from face_duel.adapters.roster_client import HttpxRosterClient
from face_duel.adapters.session_channel import SessionChannel, WebsocketSessionChannel
from face_duel.config import Settings, normalize_base_url
from face_duel.domain.session import CaptureBudget
from face_duel.services.capture import CaptureLoop, SignatureExtractor
from face_duel.services.game import GameSession, Presenter
from face_duel.services.reconciliation import RosterReconciler
from face_duel.services.roster import RosterProjection


@dataclass
class AppContainer:
    """Holds client-wide dependencies."""

    settings: Settings
    channel: SessionChannel
    roster: RosterProjection
    presenter: Presenter
    game_session: GameSession
    reconciler: RosterReconciler | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    extractor: SignatureExtractor | None = None,
    presenter: Presenter | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_extractor = extractor or load_extractor(
        resolved_settings.signature_extractor
    )
    resolved_presenter = presenter or ConsolePresenter()
    roster = RosterProjection(listeners=[resolved_presenter.show_roster])
    channel = WebsocketSessionChannel(url=resolved_settings.arbiter_ws_url)
    game_session = GameSession(
        channel=channel,
        capture_loop=CaptureLoop(resolved_extractor),
        roster=roster,
        presenter=resolved_presenter,
        join_budget=CaptureBudget(
            max_attempts=resolved_settings.join_capture_attempts,
            retry_delay=resolved_settings.join_capture_delay_seconds,
        ),
        shoot_budget=CaptureBudget(
            max_attempts=resolved_settings.shoot_capture_attempts,
            retry_delay=resolved_settings.shoot_capture_delay_seconds,
        ),
    )
    roster_client: HttpxRosterClient | None = None
    reconciler: RosterReconciler | None = None
    api_url = normalize_base_url(resolved_settings.arbiter_api_url)
    if api_url is not None:
        roster_client = HttpxRosterClient.create(
            api_url, timeout_seconds=resolved_settings.http_timeout_seconds
        )
        reconciler = RosterReconciler(
            client=roster_client,
            roster=roster,
            interval_seconds=resolved_settings.roster_poll_interval_seconds,
        )

    async def close_resources() -> None:
        await game_session.close()
        if roster_client is not None:
            await roster_client.close()

    return AppContainer(
        settings=resolved_settings,
        channel=channel,
        roster=roster,
        presenter=resolved_presenter,
        game_session=game_session,
        reconciler=reconciler,
        close_resources=close_resources,
    )
