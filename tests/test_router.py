"""Tests for the action router."""

import pytest

from pdf_tool.core.errors import InvalidActionError
from pdf_tool.schemas.pdf import Action
from pdf_tool.services import pipelines
from pdf_tool.services.pipelines import PIPELINES, route


class TestRoute:
    def test_every_action_has_a_pipeline(self):
        assert set(PIPELINES) == set(Action)

    @pytest.mark.parametrize(
        "name, handler",
        [
            ("merge", pipelines.merge),
            ("compress", pipelines.compress),
            ("convert", pipelines.convert),
            ("watermark", pipelines.watermark),
            ("ocr", pipelines.ocr),
            ("split", pipelines.split),
            ("rotate", pipelines.rotate),
        ],
    )
    def test_known_actions(self, name, handler):
        assert route(name) is handler

    @pytest.mark.parametrize("name", ["frobnicate", "MERGE", "Merge", " merge", "", None])
    def test_unknown_actions_rejected(self, name):
        with pytest.raises(InvalidActionError) as excinfo:
            route(name)
        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Invalid action"
