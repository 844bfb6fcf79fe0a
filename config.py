from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent


def _load_yaml(path: Path = BASE_DIR / "config.yaml") -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml()

# Currency
CURRENCY_SYMBOL: str = str(CFG.get("currency_symbol", "Rs"))
CURRENCY_PRECISION: int = int(CFG.get("currency_precision", 0))  # minor-unit digits, 0 = whole units
DISPLAY_DECIMALS: int = int(CFG.get("display_decimals", 2))

# Loans
MAX_SCHEDULE_MONTHS: int = int(CFG.get("max_schedule_months", 1200))
