import json
import os

import pytest

from dataset_engine import QADataset

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


class FakeResponse:
    """Stand-in for requests.Response with just what the clients read."""

    def __init__(self, status_code=200, json_data=None, text=""):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text or json_data is None else json.dumps(json_data)

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


def read_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES, name), "r", encoding="utf-8") as fh:
        return fh.read()


SAMPLE_QA = [
    {"question": "Where is RRSDEC located?", "answer": "RRSDEC is located in Begusarai, Bihar."},
    {"question": "Does RRSDEC have a hostel?", "answer": "Yes, RRSDEC has separate hostels."},
    {"question": "Which branches are offered?", "answer": "Civil, Mechanical, Electrical, ECE and CSE."},
]


@pytest.fixture
def write_dataset(tmp_path):
    def _write(data, name="data.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def dataset(write_dataset):
    ds = QADataset(write_dataset(SAMPLE_QA))
    assert ds.load()
    return ds


@pytest.fixture
def empty_dataset(tmp_path):
    ds = QADataset(str(tmp_path / "missing.json"))
    ds.load()
    return ds
