# agent_cognition/config.py
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Central runtime config: each value can be overridden by environment variable
DEFAULT_MODEL = os.getenv("AGENT_COGNITION_DEFAULT_MODEL", "gpt-4o-mini")
DEFAULT_MAX_STEPS = int(os.getenv("AGENT_COGNITION_MAX_STEPS", "6"))
DEFAULT_MAX_FRUSTRATION = int(os.getenv("AGENT_COGNITION_MAX_FRUSTRATION", "3"))
AGENT_HOME = Path(os.getenv("AGENT_COGNITION_HOME", str(Path.home() / ".co-code" / "agents")))
