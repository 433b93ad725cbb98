"""In-memory storage of contract analysis records."""
import logging
import threading
import uuid
from datetime import datetime, timezone

from schemas import AnalysisStatus, ContractAnalysis
from scoring import get_verdict

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"risk_score", "verdict", "red_flags", "standard_clauses", "resume", "status"}


def record_update_from_result(result):
    """Map an AnalysisResult to the fields persisted on its record."""
    if not result.success:
        return {"status": AnalysisStatus.FAILED}

    response = result.to_response()
    return {
        "risk_score": result.risk_score,
        "verdict": get_verdict(result.risk_score),
        "red_flags": response.get("redFlags", []),
        "standard_clauses": response.get("standardClauses", []),
        "resume": result.summary,
        "status": AnalysisStatus.ANALYZED,
    }


class ContractStore:
    """Keeps analysis records for the lifetime of the process."""

    def __init__(self):
        self._records = {}
        self._lock = threading.Lock()

    def create(self, name, contract_type, contract_text):
        now = datetime.now(timezone.utc)
        record = ContractAnalysis(
            id=str(uuid.uuid4()),
            name=name,
            contract_type=contract_type,
            contract_text=contract_text,
            status=AnalysisStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._records[record.id] = record
        logger.info(f"Created contract analysis {record.id} ({contract_type})")
        return record

    def update(self, analysis_id, **updates):
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        with self._lock:
            record = self._records.get(analysis_id)
            if record is None:
                logger.error(f"Contract analysis not found: {analysis_id}")
                return None
            record = record.model_copy(
                update={**updates, "updated_at": datetime.now(timezone.utc)}
            )
            self._records[analysis_id] = record
        return record

    def get(self, analysis_id):
        with self._lock:
            return self._records.get(analysis_id)

    def all(self):
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    def recent(self, limit=5):
        return self.all()[:limit]
