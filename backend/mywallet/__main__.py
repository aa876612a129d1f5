"""Allow ``python -m mywallet``."""

from mywallet.server import run

if __name__ == "__main__":
    run()
