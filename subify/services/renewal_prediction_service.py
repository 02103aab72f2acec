"""
Renewal likelihood prediction - asks an LLM how likely a customer is to renew
"""
import json
import logging
from typing import NamedTuple

from openai import OpenAI

from subify.core.config import settings
from subify.core.errors import PredictionError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You assess subscription customers for a software reseller. "
    "Given the reseller's notes about a customer, estimate how likely the customer "
    "is to renew when the subscription ends. Respond with a JSON object with two keys: "
    '"likelihood", a number between 0 and 1, and "reason", one or two sentences.'
)


class RenewalPrediction(NamedTuple):
    likelihood: float
    reason: str


def parse_prediction(content: str) -> RenewalPrediction:
    """
    Parse the model's JSON answer

    Raises:
        PredictionError: if the answer is not JSON or the likelihood is outside 0..1
    """
    try:
        data = json.loads(content)
        likelihood = float(data["likelihood"])
        reason = str(data.get("reason", "")).strip()
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise PredictionError(f"Unreadable prediction response: {e}") from e

    if not 0.0 <= likelihood <= 1.0:
        raise PredictionError(f"Likelihood out of range: {likelihood}")
    return RenewalPrediction(likelihood=likelihood, reason=reason)


def predict_renewal_likelihood(notes: str) -> RenewalPrediction:
    """
    Predict renewal likelihood from free-text notes

    Args:
        notes: Reseller notes entered with the submission

    Returns:
        RenewalPrediction(likelihood, reason)

    Raises:
        PredictionError: if prediction is disabled or the call fails in any way
    """
    if not settings.OPENAI_API_KEY:
        raise PredictionError("Renewal prediction disabled: OPENAI_API_KEY not set")

    try:
        client = OpenAI(api_key=settings.OPENAI_API_KEY)
        response = client.chat.completions.create(
            model=settings.RENEWAL_PREDICTION_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": notes},
            ],
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content or ""
    except Exception as e:
        raise PredictionError(f"Renewal prediction call failed: {e}") from e

    prediction = parse_prediction(content)
    logger.info(f"Predicted renewal likelihood {prediction.likelihood:.2f}")
    return prediction
