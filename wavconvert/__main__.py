"""Entry point for `python -m wavconvert`."""

import sys


def main():
    from wavconvert.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
