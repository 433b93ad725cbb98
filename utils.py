"""
Utility functions for the Contr'Act analysis service.
"""
import os
import re
import json
import logging
from datetime import date
from typing import Dict, Any, List

from constants import (
    CONTRACT_TYPE_RULES,
    DEFAULT_CONTRACT_TYPE,
    FRENCH_MONTH_ABBREVIATIONS,
    GENERIC_CONTRACT_NAMES,
)
from errors import MalformedResponseError

logger = logging.getLogger(__name__)


def validate_pdf_file(file):
    """
    Validate uploaded PDF file.

    Args:
        file: Uploaded file object

    Returns:
        tuple: (is_valid, error_message)
    """
    if not file:
        return False, "No file provided"

    if file.filename == '':
        return False, "No file selected"

    if not file.filename.lower().endswith('.pdf'):
        return False, "Only PDF files are supported"

    return True, ""


def safe_file_cleanup(filepath):
    """
    Safely remove a file with error handling.

    Args:
        filepath: Path to file to remove

    Returns:
        bool: True if successfully removed or file doesn't exist
    """
    try:
        if os.path.exists(filepath):
            os.remove(filepath)
            logger.info(f"Cleaned up file: {filepath}")
        return True
    except OSError as e:
        logger.warning(f"Failed to cleanup file {filepath}: {str(e)}")
        return False


def log_error_and_return(error_msg, status_code=500):
    """
    Log an error and return a formatted error response.

    Args:
        error_msg: Error message to log and return
        status_code: HTTP status code

    Returns:
        tuple: (error_dict, status_code)
    """
    logger.error(error_msg)
    return {"success": False, "error": error_msg}, status_code


def strip_code_fences(response_content: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    content = response_content.strip()
    if content.startswith("```json"):
        content = content[len("```json"):]
    elif content.startswith("```"):
        content = content[len("```"):]
    if content.endswith("```"):
        content = content[:-len("```")]
    return content.strip()


def extract_first_json_object(text: str):
    """Return the first balanced {...} block in text, or None."""
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]
    return None


def _loads_object(candidate):
    parsed = json.loads(candidate)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_json_response(response_content: str) -> Dict[str, Any]:
    """Parse a JSON object from an LLM reply, handling common formatting issues.

    Tries the fence-stripped reply first, then the first balanced {...}
    block, then everything between the first '{' and the last '}'.
    Raises MalformedResponseError when none of these decode to an object.
    """
    if not response_content or not response_content.strip():
        raise MalformedResponseError()

    try:
        return _loads_object(strip_code_fences(response_content))
    except ValueError as e:
        logger.error(f"Failed to parse JSON response: {str(e)}")

    candidates = [extract_first_json_object(response_content)]
    greedy = re.search(r"\{[\s\S]*\}", response_content)
    if greedy:
        candidates.append(greedy.group(0))

    for candidate in candidates:
        if not candidate:
            continue
        try:
            return _loads_object(candidate)
        except ValueError:
            continue

    logger.error("No JSON object could be extracted from the response")
    raise MalformedResponseError()


def _normalize_for_match(text):
    text = text.replace("\u2019", "'").replace("\u00a0", " ")
    return re.sub(r"\s+", " ", text).strip().lower()


def find_unverified_citations(red_flags, contract_text) -> List:
    """Return the red flags whose citation does not appear in the contract text.

    Whitespace, case and typographic apostrophes are ignored. Flags without
    a citation are not reported. Ellipses in a citation split it into
    fragments that must each appear.
    """
    haystack = _normalize_for_match(contract_text or "")
    unverified = []
    for flag in red_flags:
        if not flag.citation.strip():
            continue
        fragments = [
            _normalize_for_match(part)
            for part in re.split(r"\.\.\.|…|\[\.\.\.\]", flag.citation.strip('"«» '))
        ]
        if not all(fragment in haystack for fragment in fragments if fragment):
            unverified.append(flag)
    return unverified


def detect_contract_type(text, file_name):
    """Guess the contract family from its file name and content."""
    lower_text = (text or "").lower()
    lower_name = (file_name or "").lower()

    for contract_type, name_keywords, text_keywords in CONTRACT_TYPE_RULES:
        if any(keyword in lower_name for keyword in name_keywords):
            return contract_type
        if any(keyword in lower_text for keyword in text_keywords):
            return contract_type

    return DEFAULT_CONTRACT_TYPE


def extract_contract_name(file_name, text, today=None):
    """Build a display name from the uploaded file name.

    Generic or very short names are replaced by "<type> - <day month>".
    """
    name = re.sub(r"\.pdf$", "", file_name or "", flags=re.IGNORECASE)
    name = re.sub(r"[_-]", " ", name)
    name = " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))

    if len(name) < 5 or name.lower() in GENERIC_CONTRACT_NAMES:
        today = today or date.today()
        contract_type = detect_contract_type(text, file_name)
        name = f"{contract_type} - {today.day} {FRENCH_MONTH_ABBREVIATIONS[today.month - 1]}"

    return name
