from __future__ import annotations

import os
from typing import Any


def debug(message: str, *args: Any) -> None:
    try:
        debug_env = os.getenv("DEBUG", "")
        if "box" in debug_env:
            print(f"boxcontent: {message}", *args)
    except Exception:
        pass
