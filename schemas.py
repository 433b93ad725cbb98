"""Pydantic models for data validation and structure."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from constants import DEFAULT_SUMMARY


class Severity(str, Enum):
    """Ordinal risk level of a red flag, with its wire value."""
    LOW = "faible"
    MODERATE = "modérée"
    HIGH = "élevée"


class Verdict(str, Enum):
    SIGN = "SIGNER"
    NEGOTIATE = "NÉGOCIER"
    REFUSE = "REFUSER"


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    ANALYZED = "analyzed"
    FAILED = "failed"


class RedFlag(BaseModel):
    """A detected clause that is risky for the signing party."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    category: str = Field(alias="type", description="The clause-risk category.")
    title: str = Field(alias="titre", description="Short human label.")
    description: str = Field(description="Why the clause is problematic, in 2-3 sentences.")
    citation: str = Field(default="", description="Verbatim excerpt from the contract.")
    severity: Severity = Field(alias="gravite")
    article_ref: Optional[str] = Field(default=None, alias="article", description="Locator such as 'Article 3.2'.")

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("citation", mode="before")
    @classmethod
    def _null_citation(cls, value):
        return "" if value is None else value


class StandardClause(BaseModel):
    """A conforming clause reported alongside the red flags."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(alias="titre")
    description: str


class AnalysisPayload(BaseModel):
    """The JSON object the model is asked to return.

    ``redFlags`` must be present (null is read as an empty list) and no
    other top-level keys are accepted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    red_flags: List[RedFlag] = Field(alias="redFlags")
    standard_clauses: List[StandardClause] = Field(default_factory=list, alias="standardClauses")
    summary: str = Field(default=DEFAULT_SUMMARY, alias="resume")

    @field_validator("red_flags", "standard_clauses", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("summary", mode="before")
    @classmethod
    def _blank_summary(cls, value):
        return value or DEFAULT_SUMMARY


class AnalysisResult(BaseModel):
    """Outcome of one analysis request. Read-only once built."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    success: bool
    risk_score: Optional[int] = Field(default=None, alias="riskScore", ge=0, le=100)
    red_flags: Optional[List[RedFlag]] = Field(default=None, alias="redFlags")
    standard_clauses: Optional[List[StandardClause]] = Field(default=None, alias="standardClauses")
    summary: Optional[str] = Field(default=None, alias="resume")
    error: Optional[str] = None

    @classmethod
    def failure(cls, error):
        return cls(success=False, error=error)

    def to_response(self):
        """Wire representation, as returned to clients."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ContractAnalysis(BaseModel):
    """A stored contract analysis record."""
    id: str
    name: str
    contract_type: str
    contract_text: str
    risk_score: Optional[int] = None
    verdict: Optional[Verdict] = None
    red_flags: list = Field(default_factory=list)
    standard_clauses: list = Field(default_factory=list)
    resume: Optional[str] = None
    status: AnalysisStatus = AnalysisStatus.PENDING
    created_at: datetime
    updated_at: datetime
