"""
Study Session Factory
Centralizes wiring of the session to its storage, clock and audio adapters.
"""

from smart_learner.application.config import AppConfig
from smart_learner.application.study_session import StudySession
from smart_learner.domain.interfaces import Clock
from smart_learner.infrastructure.audio import AudioLibrary, CommandAudioPlayer
from smart_learner.infrastructure.clock import SystemClock
from smart_learner.infrastructure.deck_store import YamlDeckStore


def get_study_session(config: AppConfig, clock: Clock | None = None) -> StudySession:
    """
    Returns a StudySession backed by the configured storage folder.
    """
    return StudySession(
        store=YamlDeckStore(config.folder_path),
        clock=clock or SystemClock(),
        schedule=config.schedule(),
        audio=AudioLibrary(config.folder_path),
        player=CommandAudioPlayer(config.player_command()),
    )
