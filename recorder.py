import logging

import imageio.v2 as imageio  # v2 API is more stable

import config

logger = logging.getLogger(__name__)


class Recorder:
    """Keeps rendered frames in memory and writes them out as a video on save()."""

    def __init__(
        self, path=config.OUTPUT_FILE, fps=None, frame_limit=config.FRAME_LIMIT
    ):
        self.path = path
        self.fps = fps if fps is not None else round(1 / config.TICK_SECONDS)
        self.frame_limit = frame_limit
        self.frames = []

    @property
    def full(self):
        return bool(self.frame_limit) and len(self.frames) >= self.frame_limit

    def capture(self, buffer):
        if self.full:
            return
        frame = buffer.to_image()
        if self.frames and frame.shape != self.frames[0].shape:
            logger.warning(
                "Skipping frame of shape %s, recording is %s",
                frame.shape,
                self.frames[0].shape,
            )
            return
        self.frames.append(frame)

    def save(self):
        if not self.frames:
            return
        imageio.mimsave(self.path, self.frames, fps=self.fps)
        logger.info("Saved %d frames to %s", len(self.frames), self.path)
