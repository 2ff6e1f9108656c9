import os

from spriteforge.cli import main


if __name__ == "__main__":
    # pygame only encodes PNGs here; never open a window
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    raise SystemExit(main())
