# tests/conftest.py
from datetime import datetime
import pytest
from fastapi.testclient import TestClient

from profile_processor.main import app


# --- Fixed clock so durations and seniority are reproducible ---
@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


# --- Profile builder: a minimal valid profile plus overrides ---
@pytest.fixture
def make_profile():
    def _make(**overrides):
        profile = {
            "urn": "ACoAAA000001",
            "username": "alex-chen",
            "firstName": "Alex",
            "lastName": "Chen",
            "headline": "",
            "summary": "",
            "positions": [],
            "educations": [],
            "skills": [],
            "languages": [],
            "supportedLocales": [],
        }
        profile.update(overrides)
        return profile
    return _make


@pytest.fixture
def sample_positions():
    """Two roles at A (promotion), then one at B; most recent first."""
    return [
        {"companyId": "A", "companyName": "Acme", "title": "Sr Eng",
         "companyIndustry": "Software", "start": {"year": 2022, "month": 1}},
        {"companyId": "A", "companyName": "Acme", "title": "Eng",
         "companyIndustry": "Software", "start": {"year": 2020, "month": 1}, "end": {"year": 2021, "month": 12}},
        {"companyId": "B", "companyName": "Beta", "title": "Lead",
         "companyIndustry": "Retail", "start": {"year": 2017, "month": 3}, "end": {"year": 2019, "month": 12}},
    ]
