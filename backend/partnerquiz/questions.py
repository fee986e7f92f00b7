"""Question bank loading.

The bank is a JSON file holding a non-empty list of question records. Records
are passed through to clients untouched; the engine never inspects them.
"""
import json
import logging
from pathlib import Path
from typing import Any, List

from partnerquiz.errors import QuestionBankError

logger = logging.getLogger(__name__)


def load_questions(path) -> List[Any]:
    """Load and validate the question bank at ``path``.

    Raises:
        QuestionBankError: if the file is missing, is not valid JSON, or does
            not contain a non-empty list.
    """
    source = Path(path)
    try:
        with open(source, 'r', encoding='utf-8') as f:
            questions = json.load(f)
    except FileNotFoundError:
        raise QuestionBankError(f'Question bank not found: {source}')
    except json.JSONDecodeError as exc:
        raise QuestionBankError(f'Question bank is not valid JSON: {source} ({exc})')

    if not isinstance(questions, list) or not questions:
        raise QuestionBankError(f'{source} must contain a non-empty array of questions')

    logger.debug(f"[questions] {len(questions)} records from {source}")
    return questions
