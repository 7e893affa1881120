# tests/conftest.py
import sys
from pathlib import Path
from typing import Dict, List

import pytest

# keep the project root importable when running without an install
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def hr_finance_rows() -> List[Dict[str, str]]:
    return [
        {"category": "HR", "department": "People", "keywords": "onboarding, onboard"},
        {"category": "HR", "department": "People", "keywords": "payroll"},
        {"category": "Finance", "department": "Money", "keywords": "payroll, payrolls"},
    ]


@pytest.fixture()
def mixed_rows() -> List[Dict[str, object]]:
    return [
        {"category": "Sales ", "department": "East", "keywords": "Leads, pipeline"},
        {"category": "", "department": "East", "keywords": "ignored"},
        {"category": "Support", "department": "West", "keywords": None},
        {"category": "Sales", "department": "West", "keywords": "leads, quota"},
        {"category": "Support", "department": "East", "keywords": "tickets, ticket"},
        {"category": None, "department": None, "keywords": "orphan"},
    ]
