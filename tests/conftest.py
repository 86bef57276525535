import json

import pytest


MENU_EN = {"title": "Hello", "nested": {"ok": "Yes"}}


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def write_json():
    return _write_json


@pytest.fixture
def translations(tmp_path):
    """A root holding english/Menu_en.json only."""
    _write_json(tmp_path / "english" / "Menu_en.json", MENU_EN)
    return tmp_path
