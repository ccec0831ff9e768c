"""Module entrypoint.

Allows:
    python -m ost_logger
"""

from __future__ import annotations

from ost_logger.server.log_server import main

if __name__ == "__main__":
    main()
