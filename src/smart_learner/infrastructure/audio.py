"""
Audio storage and playback.

Imported files are copied into ``<folder>/audio``. Playback runs an external
player command on a background thread so the study loop is never blocked.
"""

import logging
import shutil
import subprocess
import threading
from pathlib import Path

from smart_learner.domain.constants import AUDIO_DIR_NAME
from smart_learner.domain.errors import AudioError
from smart_learner.domain.interfaces import AudioPlayer, AudioStore

logger = logging.getLogger(__name__)


class AudioLibrary(AudioStore):
    def __init__(self, folder: Path):
        self.audio_dir = folder / AUDIO_DIR_NAME

    def _free_name(self, file_name: str) -> str:
        """
        First name not yet taken in the audio folder.

        ``clip.mp3`` becomes ``clip1.mp3``, ``clip2.mp3``... on collision.
        """
        if not (self.audio_dir / file_name).exists():
            return file_name

        stem, suffix = Path(file_name).stem, Path(file_name).suffix
        i = 1
        while (self.audio_dir / f"{stem}{i}{suffix}").exists():
            i += 1
        return f"{stem}{i}{suffix}"

    def import_file(self, source: Path) -> str:
        if not source.is_file():
            raise AudioError(f"Audio file not found: {source}")

        self.audio_dir.mkdir(parents=True, exist_ok=True)
        name = self._free_name(source.name)
        try:
            shutil.copy2(source, self.audio_dir / name)
        except OSError as e:
            raise AudioError(f"Could not copy {source}: {e}") from e

        logger.info(f"Imported audio {source} as {name}")
        return name

    def resolve(self, handle: str) -> Path:
        return self.audio_dir / handle

    def exists(self, handle: str) -> bool:
        return self.resolve(handle).is_file()


class CommandAudioPlayer(AudioPlayer):
    """
    Plays files by running an external command such as ``afplay`` or ``ffplay``.

    An empty command turns playback into a logged no-op.
    """

    def __init__(self, command: list[str]):
        self.command = command

    def _run(self, path: Path) -> None:
        try:
            subprocess.run([*self.command, str(path)], check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning(f"Audio playback failed for {path}: {e}")

    def play(self, path: Path) -> threading.Thread | None:
        if not self.command:
            logger.debug(f"No audio command configured, not playing {path}")
            return None

        thread = threading.Thread(target=self._run, args=(path,), daemon=True)
        thread.start()
        return thread
