"""
Starts the captain list server.

Settings (LOCAL_URL, ROOMID, RUID, LOG_LEVEL) come from the environment or a
.env file; see captain_list.config.Settings.
"""

import logging
import sys

from captain_list.main import run


def main() -> None:
    try:
        run()
    except Exception:
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Captain list server failed to start.")
        print("\n❌ Captain list server failed to start.")
        print("   See error above. Most common causes:")
        print("   - ROOMID or RUID missing or not an unsigned 32-bit integer")
        print("   - LOCAL_URL not in host:port form, or port already in use")
        print("   - Missing dependencies / broken venv\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
