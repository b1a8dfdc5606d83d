import logging
import sys

import numpy as np

import config
from frame_loop import FrameLoop
from recorder import Recorder

logger = logging.getLogger("particle_terminal")


def make_display():
    if config.BACKEND == "window":
        from window import WindowDisplay

        return WindowDisplay()
    if config.BACKEND == "terminal":
        from terminal import TerminalDisplay

        return TerminalDisplay()
    raise ValueError(f"Unknown backend {config.BACKEND!r}")


def main():
    # stdout belongs to the display, so logs go to a file
    logging.basicConfig(
        filename=config.LOG_FILE,
        level=getattr(logging, config.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    recorder = Recorder() if config.RECORD else None
    loop = None
    status = 1
    try:
        with make_display() as display:
            rng = np.random.default_rng(config.SEED)
            loop = FrameLoop(display, rng=rng, recorder=recorder)
            status = loop.run()
    except OSError:
        logger.exception("Display IO failed")
        print(
            "particle_terminal: display IO failed, see " + config.LOG_FILE,
            file=sys.stderr,
        )
    finally:
        if recorder is not None:
            recorder.save()

    if loop is not None:
        logger.info(loop.timing_report())
        print(loop.timing_report())
    return status


if __name__ == "__main__":
    sys.exit(main())
