"""
Comment Summarizer.

Condenses free-text feedback comments into highlighted positive quotes and
improvement themes using Gemini.
"""

import json
import logging
from typing import List

import google.generativeai as genai

from src.models.feedback import (
    CommentAnalysis,
    FeedbackRecord,
    ImprovementArea,
    PositiveFeedback,
)

logger = logging.getLogger(__name__)

# Placeholder answers that mean "no comment"
SKIPPED_COMMENTS = frozenset({"na", "n/a", "none", "ntg", "nil", ""})

MAX_ITEMS = 3

PROMPT_TEMPLATE = """From the following list of verbatim feedback comments about an instructor, perform an analysis.

Return a valid JSON object with exactly two keys: "positiveFeedback" and "improvementAreas".
- "positiveFeedback": an array of up to 3 objects, each with a "quote" key (a verbatim positive comment) and a "keywords" key (an array of 1-3 relevant keywords from that quote).
- "improvementAreas": an array of up to 3 objects, each with a "theme" key (a short topic such as "Pacing" or "Interaction") and a "suggestion" key (a concise, actionable suggestion for the instructor).

If the comments contain no explicit areas for improvement, infer from their context and still give general best-practice suggestions that could enhance the sessions.
If no comment fits "positiveFeedback", return an empty array for that key.

Comments: \"\"\"{comments}\"\"\""""


class CommentSummaryError(Exception):
    """Base class for summarization failures."""


class SummaryServiceError(CommentSummaryError):
    """The text-generation call failed."""


class SummaryParseError(CommentSummaryError):
    """The model reply did not contain parseable JSON."""


def collect_comments(records: List[FeedbackRecord]) -> List[str]:
    """Comments worth summarizing, placeholders removed."""
    comments = []
    for record in records:
        comment = record.comment.strip()
        if comment.lower() in SKIPPED_COMMENTS:
            continue
        comments.append(comment)
    return comments


def build_prompt(comments: List[str]) -> str:
    return PROMPT_TEMPLATE.format(comments="\n".join(comments))


def extract_json_block(text: str) -> str:
    """
    Cut the JSON object out of a free-text reply.

    Raises:
        SummaryParseError: If the reply has no {...} block
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise SummaryParseError("No JSON object found in model response")
    return text[start:end + 1]


def parse_analysis(text: str) -> CommentAnalysis:
    """
    Parse a model reply into a CommentAnalysis.

    Missing or malformed keys become empty lists; each list is capped at 3.

    Raises:
        SummaryParseError: If the embedded JSON is invalid
    """
    try:
        data = json.loads(extract_json_block(text))
    except json.JSONDecodeError as e:
        raise SummaryParseError(f"Invalid JSON in model response: {e}") from e

    if not isinstance(data, dict):
        logger.warning("Model response JSON is not an object, treating as empty")
        return CommentAnalysis()

    def _items(key: str) -> list:
        value = data.get(key) or []
        if not isinstance(value, list):
            logger.warning(f"Model response field '{key}' is not a list, ignoring")
            return []
        return [item for item in value if isinstance(item, dict)][:MAX_ITEMS]

    return CommentAnalysis(
        positive_feedback=[PositiveFeedback.from_dict(i) for i in _items("positiveFeedback")],
        improvement_areas=[ImprovementArea.from_dict(i) for i in _items("improvementAreas")],
    )


class CommentSummarizer:
    """
    Summarizes feedback comments with Gemini.

    The model is only configured when there is something to summarize, so
    requests without comments never need the API key.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0
    ):
        """
        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
        """
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise SummaryServiceError("GEMINI_KEY not set in environment.")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                model_name=self.model_name,
                generation_config={
                    "temperature": self.temperature,
                    "response_mime_type": "application/json",
                },
            )
            logger.info(
                f"Initialized CommentSummarizer with model={self.model_name}, temp={self.temperature}"
            )
        return self._model

    def generate(self, prompt: str) -> str:
        """
        Run one generation call.

        Raises:
            SummaryServiceError: If the API call fails
        """
        model = self._get_model()
        try:
            response = model.generate_content(prompt)
            return response.text
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise SummaryServiceError(str(e)) from e

    def summarize(self, records: List[FeedbackRecord]) -> CommentAnalysis:
        """
        Summarize the comments of the given records.

        Returns:
            CommentAnalysis (empty without calling Gemini when no comments remain)

        Raises:
            SummaryServiceError: If the Gemini call fails
            SummaryParseError: If the reply cannot be parsed
        """
        comments = collect_comments(records)
        if not comments:
            logger.debug("No usable comments, skipping Gemini call")
            return CommentAnalysis()

        logger.info(f"Summarizing {len(comments)} comments")
        reply = self.generate(build_prompt(comments))
        return parse_analysis(reply)
