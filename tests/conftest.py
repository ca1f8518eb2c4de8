import copy
import json
import sys
from pathlib import Path

import pytest

from cvrender.model import default_document


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


SAMPLE_DOCUMENT = {
    "personalInfo": {
        "fullName": "Ana Souza",
        "jobTitle": "Senior Data Engineer",
        "email": "ana@example.com",
        "phone": "+55 11 99999-0000",
        "address": "São Paulo, BR",
        "linkedin": "linkedin.com/in/ana",
        "github": "github.com/ana",
        "summary": "Builds **reliable** data platforms.\n- Streaming\n- Batch",
    },
    "experience": [
        {
            "id": "exp1",
            "role": "Data Engineer",
            "company": "Acme",
            "location": "Remote",
            "startDate": "2021-03",
            "endDate": "2023-05",
            "current": True,
            "description": "- Built *Kafka* pipelines\n- Cut costs by **30%**",
        },
        {
            "id": "exp2",
            "role": "Analyst",
            "company": "Globex",
            "startDate": "2018-01",
            "endDate": "2021-02",
            "current": False,
            "description": "Reporting.",
        },
    ],
    "education": [
        {"id": "edu1", "school": "USP", "degree": "BSc Computer Science", "startDate": "2014", "endDate": "2017"},
    ],
    "skills": [
        {"id": "s1", "name": "Python", "level": 5},
        {"id": "s2", "name": "SQL", "level": 4},
    ],
    "languages": ["Portuguese", "English"],
    "projects": [
        {"id": "p1", "name": "etl-kit", "description": "ETL helpers", "url": "github.com/ana/etl-kit"},
    ],
    "coverLetter": {
        "recipientName": "Jane Doe",
        "companyName": "Initech",
        "jobTitle": "Lead Engineer",
        "content": "Dear Jane,\nI am **excited** to apply.",
    },
}


@pytest.fixture
def sample_document():
    """A populated document merged over the blank template."""
    doc = default_document()
    for key, value in SAMPLE_DOCUMENT.items():
        if isinstance(value, dict):
            doc[key].update(copy.deepcopy(value))
        else:
            doc[key] = copy.deepcopy(value)
    return doc


@pytest.fixture
def sample_data_file(tmp_path: Path, sample_document):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps({"version": 1, "data": sample_document}, indent=2), encoding="utf-8")
    return path


class FakeClient:
    """Stands in for OpenAITextClient."""

    def __init__(self, reply="", available=True, error=None):
        self.reply = reply
        self.available = available
        self.error = error
        self.calls = []

    def complete(self, system, user, *, json_mode=False):
        self.calls.append({"system": system, "user": user, "json_mode": json_mode})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_client():
    return FakeClient
