from types import SimpleNamespace

import pytest

from subify.core.config import settings
from subify.core.errors import PredictionError
from subify.services import renewal_prediction_service
from subify.services.renewal_prediction_service import parse_prediction, predict_renewal_likelihood


def test_parse_prediction():
    prediction = parse_prediction('{"likelihood": 0.65, "reason": " Uses it daily. "}')

    assert prediction.likelihood == 0.65
    assert prediction.reason == "Uses it daily."


@pytest.mark.parametrize(
    "content",
    ["not json", '{"reason": "missing likelihood"}', '{"likelihood": 1.5}', '{"likelihood": "high"}'],
)
def test_parse_prediction_rejects_bad_answers(content):
    with pytest.raises(PredictionError):
        parse_prediction(content)


def test_prediction_disabled_without_api_key():
    with pytest.raises(PredictionError):
        predict_renewal_likelihood("notes")


class _FakeOpenAI:
    def __init__(self, content=None, error=None, **kwargs):
        self._content = content
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        if self._error:
            raise self._error
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_prediction_calls_model(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(
        renewal_prediction_service,
        "OpenAI",
        lambda **kwargs: _FakeOpenAI(content='{"likelihood": 0.2, "reason": "Asked about refunds"}'),
    )

    prediction = predict_renewal_likelihood("Asked about refunds twice")

    assert prediction.likelihood == 0.2
    assert prediction.reason == "Asked about refunds"


def test_prediction_wraps_client_errors(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(
        renewal_prediction_service,
        "OpenAI",
        lambda **kwargs: _FakeOpenAI(error=RuntimeError("timeout")),
    )

    with pytest.raises(PredictionError):
        predict_renewal_likelihood("notes")
