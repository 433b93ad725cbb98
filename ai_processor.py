import logging

import openai
from langchain_community.document_loaders import PyMuPDFLoader
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from config import Config
from constants import (
    ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT,
    CHAT_SYSTEM_PROMPT, CHAT_USER_PROMPT,
    NEGOTIATION_SYSTEM_PROMPT, NEGOTIATION_USER_PROMPT,
    LEGAL_SYSTEM_PROMPT, LEGAL_USER_PROMPT,
    CHAT_FALLBACK_MESSAGE, INVALID_RESPONSE_MESSAGE, MISSING_API_KEY_MESSAGE,
    NO_RED_FLAGS_CONTEXT,
)
from errors import (
    EmptyInputError, MalformedResponseError, PaymentRequired, RateLimited, UpstreamError,
)
from schemas import AnalysisPayload, AnalysisResult, RedFlag
from scoring import score_red_flags
from utils import find_unverified_citations, parse_json_response

logger = logging.getLogger(__name__)


class ChatGateway:
    """Text generation over an OpenAI-compatible chat completion endpoint."""

    def __init__(self, config=Config):
        self.config = config
        self._llm = None

    def _get_llm(self):
        if self._llm is None:
            if not self.config.OPENAI_API_KEY:
                raise UpstreamError(MISSING_API_KEY_MESSAGE)
            # Callers own retries and timeouts
            self._llm = ChatOpenAI(
                openai_api_key=self.config.OPENAI_API_KEY,
                base_url=self.config.OPENAI_BASE_URL,
                model=self.config.ANALYSIS_MODEL,
                temperature=self.config.ANALYSIS_TEMPERATURE,
                timeout=self.config.REQUEST_TIMEOUT,
                max_retries=0,
            )
        return self._llm

    def generate(self, system_prompt, user_prompt, max_tokens):
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        llm = self._get_llm().bind(max_tokens=max_tokens)

        try:
            response = llm.invoke(messages)
        except openai.APIStatusError as e:
            logger.error(f"AI API error: {e.status_code} {str(e)}")
            if e.status_code == 429:
                raise RateLimited(status_code=429) from e
            if e.status_code == 402:
                raise PaymentRequired(status_code=402) from e
            raise UpstreamError(f"AI API error: {e.status_code}", status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"AI API call failed: {str(e)}")
            raise UpstreamError(f"AI API error: {str(e)}") from e

        content = response.content
        if not isinstance(content, str) or not content.strip():
            logger.error("No content in API response")
            raise MalformedResponseError(INVALID_RESPONSE_MESSAGE)
        return content


def format_red_flags_context(red_flags, include_citation=True, include_article=False):
    """Render red flags as a bullet list for the advice prompts.

    Client-supplied flags are only interpolated, so partial or unknown
    fields are rendered as given.
    """
    if not red_flags:
        return NO_RED_FLAGS_CONTEXT

    entries = []
    for flag in red_flags:
        if isinstance(flag, RedFlag):
            flag = flag.model_dump(mode="json", by_alias=True)
        elif not isinstance(flag, dict):
            flag = {"titre": str(flag)}
        entry = f"• {flag.get('titre', '')} (Gravité: {flag.get('gravite', '')})\n  {flag.get('description', '')}"
        if include_article and flag.get("article"):
            entry += f" - {flag['article']}"
        if include_citation and flag.get("citation"):
            entry += f'\n  Citation: "{flag["citation"]}"'
        entries.append(entry)
    return "\n\n".join(entries)


class ContractAnalyzer:
    """Runs contract analyses and contract Q&A against the generation backend.

    Expected failures never escape the public methods: analyses come back
    as ``AnalysisResult(success=False, error=...)`` and the text operations
    return a fixed apology. An empty contract is rejected with
    ``EmptyInputError`` before any call is made.
    """

    def __init__(self, config=Config, gateway=None):
        self.config = config
        self.gateway = gateway or ChatGateway(config)

    def analyze_contract(self, contract_text):
        if not contract_text or not contract_text.strip():
            logger.error("No contract text provided")
            raise EmptyInputError()

        logger.info(f"Analyzing contract with length: {len(contract_text)}")

        try:
            content = self.gateway.generate(
                ANALYSIS_SYSTEM_PROMPT,
                ANALYSIS_USER_PROMPT.format(contract_text=contract_text),
                self.config.ANALYSIS_MAX_TOKENS,
            )
            payload = self._decode_payload(content)
        except (UpstreamError, MalformedResponseError) as e:
            logger.error(f"Contract analysis failed: {str(e)}")
            return AnalysisResult.failure(str(e))

        for flag in find_unverified_citations(payload.red_flags, contract_text):
            logger.warning(f"Citation not found in contract for red flag '{flag.title}'")

        risk_score = score_red_flags(payload.red_flags)
        logger.info(f"Analysis complete. Risk score: {risk_score}, red flags: {len(payload.red_flags)}")

        return AnalysisResult(
            success=True,
            risk_score=risk_score,
            red_flags=payload.red_flags,
            standard_clauses=payload.standard_clauses,
            summary=payload.summary,
        )

    @staticmethod
    def _decode_payload(content):
        data = parse_json_response(content)
        try:
            return AnalysisPayload.model_validate(data)
        except ValidationError as e:
            logger.error(f"Analysis JSON does not match the expected shape: {str(e)}")
            raise MalformedResponseError() from e

    def _generate_text(self, system_prompt, user_prompt, max_tokens, label):
        try:
            answer = self.gateway.generate(system_prompt, user_prompt, max_tokens)
        except (UpstreamError, MalformedResponseError) as e:
            logger.error(f"Error in {label}: {str(e)}")
            return CHAT_FALLBACK_MESSAGE
        logger.info(f"{label.capitalize()} response generated")
        return answer

    def ask_question(self, question, contract_context):
        """Answers one question from the contract text alone."""
        if not question or not question.strip():
            return CHAT_FALLBACK_MESSAGE

        logger.info(f"Processing question: {question[:50]}...")
        return self._generate_text(
            CHAT_SYSTEM_PROMPT,
            CHAT_USER_PROMPT.format(contract_context=contract_context or "", question=question),
            self.config.CHAT_MAX_TOKENS,
            "chat",
        )

    def negotiation_advice(self, contract_context, red_flags=None):
        logger.info("Processing negotiation advice...")
        return self._generate_text(
            NEGOTIATION_SYSTEM_PROMPT,
            NEGOTIATION_USER_PROMPT.format(
                contract_context=contract_context or "",
                red_flags_context=format_red_flags_context(red_flags),
            ),
            self.config.NEGOTIATION_MAX_TOKENS,
            "negotiation",
        )

    def legal_expertise(self, contract_context, red_flags=None):
        logger.info("Processing legal expertise...")
        return self._generate_text(
            LEGAL_SYSTEM_PROMPT,
            LEGAL_USER_PROMPT.format(
                contract_context=contract_context or "",
                red_flags_context=format_red_flags_context(
                    red_flags, include_citation=False, include_article=True
                ),
            ),
            self.config.LEGAL_MAX_TOKENS,
            "legal expertise",
        )


def load_pdf_text(filepath):
    """Extract the plain text of a PDF, pages joined by blank lines."""
    logger.info(f"Loading PDF text from: {filepath}")
    documents = PyMuPDFLoader(filepath).load()
    return "\n\n".join(doc.page_content for doc in documents).strip()
