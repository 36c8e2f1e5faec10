"""
Task extraction for JournalTask.

Uses Claude via LangChain to turn journal text into a structured task list.
"""

import json
import logging
import re
from datetime import date

from langchain_anthropic import ChatAnthropic

from .config import fetch_api_key, load_model_config, DEFAULT_MODEL
from .errors import ExtractionError
from .models import ExtractionResult
from .prompts import get_extraction_prompt

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[A-Za-z]*\s*\n?(.*?)\n?```\s*$", re.DOTALL)


def response_text(content) -> str:
    """Flatten a chat model response's content into plain text.

    Anthropic responses are either a string or a list of content blocks.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def parse_extraction_response(text: str) -> ExtractionResult:
    """Decode and validate the model's JSON answer.

    Empty output normalizes to an empty task list. A surrounding Markdown code
    fence is stripped before decoding.

    Raises:
        ExtractionError: If the text is not JSON or doesn't match the task schema
    """
    text = (text or "").strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()
    if not text:
        text = '{"tasks": []}'

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"AI response was not valid JSON: {e}") from e

    return ExtractionResult.from_dict(payload)


def extract_tasks_from_journal(
    journal_content: str,
    api_key: str | None = None,
    current_date: str | None = None,
) -> ExtractionResult:
    """Extract tasks from journal text using Claude via LangChain.

    Args:
        journal_content: The raw journal text
        api_key: Optional Anthropic API key (uses ANTHROPIC_API_KEY env var if not provided)
        current_date: ISO date for entries without a date (defaults to today)

    Returns:
        The schema-validated extraction result
    """
    config = load_model_config()

    # Extract model from config or use default
    model = config.pop("model", DEFAULT_MODEL)

    # Build ChatAnthropic with config parameters
    llm = ChatAnthropic(
        model=model,
        api_key=fetch_api_key(api_key),
        **config
    )

    chain = get_extraction_prompt() | llm

    logger.info("Extracting tasks from %d characters of journal text with %s", len(journal_content), model)
    response = chain.invoke({
        "journal_content": journal_content,
        "current_date": current_date or date.today().isoformat(),
    })

    result = parse_extraction_response(response_text(response.content))
    logger.info("Extracted %d task(s)", len(result.tasks))
    return result


class ExtractionClient:
    """Extraction collaborator used by the sync orchestrator."""

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key

    def extract(self, journal_content: str) -> ExtractionResult:
        return extract_tasks_from_journal(journal_content, api_key=self.api_key)
