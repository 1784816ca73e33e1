"""
Checks that imported third-party distributions are declared in setup.py.
"""

import re
from pathlib import Path

SETUP_PY = Path(__file__).resolve().parent.parent / "setup.py"


def _declared_requirements():
    text = SETUP_PY.read_text(encoding="utf-8")
    block = re.search(r"^requirements = \[(.*?)^\]", text, re.M | re.S).group(1)
    return {re.split(r"[<>=!~\[]", name)[0] for name in re.findall(r'"([^"]+)"', block)}


def test_runtime_imports_are_declared():
    declared = _declared_requirements()
    for distribution in ("supabase", "postgrest", "python-dotenv", "pydantic", "click"):
        assert distribution in declared
