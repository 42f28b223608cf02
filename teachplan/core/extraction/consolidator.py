"""
ResultConsolidator - Filter and deduplicate merged chunk output.

Chunks overlap in what they see (tables spanning pages, repeated
headers), so the same standard often comes back several times with
varying completeness. Candidates are cleaned, filtered for table-header
leakage and fragments, then deduplicated on the code-free,
whitespace-free standard body. A coded version replaces an uncoded one
already kept for the same body.
"""
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from teachplan.config.extraction_limits import MIN_FRAGMENT_CHARS, MIN_STANDARD_CHARS
from teachplan.core.models.standard import CandidateRecord, FinalRecord

from .sanitizer import sanitize_text

logger = logging.getLogger(__name__)

HEADER_TERMS = frozenset({
    "성취기준", "내용체계", "영역", "단원명", "평가요소", "교육과정",
    "핵심아이디어", "단원", "구분", "순서", "시기", "차시",
})
STANDARD_CODE_PHRASE = "성취기준코드"

_LEADING_MARKER = re.compile(r"^[-·*]\s*")
_CODE = re.compile(r"\[[^\]]+\]")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"[다.?]$")
_NOUN_END = re.compile(r"[임음함]$")


@dataclass
class _Normalized:
    standard: str
    has_code: bool
    body: str
    key: str


def normalize_standard(text: str) -> _Normalized:
    """Derive the filtering text and deduplication key of a standard.

    Only one leading bullet or dash is removed.
    """
    standard = _LEADING_MARKER.sub("", (text or "").strip())
    has_code = _CODE.search(standard) is not None
    body = _CODE.sub("", standard).strip()
    key = _WHITESPACE.sub("", body)
    return _Normalized(standard=standard, has_code=has_code, body=body, key=key)


class ResultConsolidator:
    """
    Turn a pool of candidate records into the final record set.

    Usage:
        consolidator = ResultConsolidator()
        records = consolidator.consolidate(schedule_result.all_records)
    """

    def __init__(
        self,
        min_standard_chars: int = MIN_STANDARD_CHARS,
        min_fragment_chars: int = MIN_FRAGMENT_CHARS,
        header_terms: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            min_standard_chars: Cleaned standard text shorter than this is dropped
            min_fragment_chars: Non-sentence candidates with a shorter key are dropped
            header_terms: Keys treated as table-header leakage
        """
        self.min_standard_chars = min_standard_chars
        self.min_fragment_chars = min_fragment_chars
        self.header_terms = frozenset(header_terms) if header_terms is not None else HEADER_TERMS

    def consolidate(
        self,
        candidates: Iterable[Union[CandidateRecord, FinalRecord]],
    ) -> List[FinalRecord]:
        """
        Filter, deduplicate and sanitize candidates.

        Args:
            candidates: Merged records from every chunk; FinalRecords are
                accepted so the output can be consolidated again

        Returns:
            FinalRecords in first-accepted order
        """
        kept: List[CandidateRecord] = []
        kept_has_code: List[bool] = []
        positions: Dict[str, int] = {}
        seen = 0

        for candidate in candidates:
            seen += 1
            if isinstance(candidate, FinalRecord):
                candidate = candidate.to_candidate()
            candidate = self._sanitize(candidate)

            norm = normalize_standard(candidate.standard)
            if not self._accept(candidate, norm):
                continue

            index = positions.get(norm.key)
            if index is None:
                positions[norm.key] = len(kept)
                kept.append(candidate)
                kept_has_code.append(norm.has_code)
            elif norm.has_code and not kept_has_code[index]:
                logger.debug(f"Replacing uncoded standard with coded version: {norm.standard!r}")
                kept[index] = candidate
                kept_has_code[index] = True
            else:
                logger.debug(f"Dropping duplicate standard: {norm.standard!r}")

        logger.info(f"Consolidated {seen} candidates to {len(kept)} standards")
        return [self._finalize(record) for record in kept]

    def _accept(self, candidate: CandidateRecord, norm: _Normalized) -> bool:
        """Filter policy; rejections are silent apart from debug logging."""
        if len(norm.standard) < self.min_standard_chars:
            logger.debug(f"Too short: {norm.standard!r}")
            return False

        if norm.key in self.header_terms or STANDARD_CODE_PHRASE in norm.key:
            logger.debug(f"Table header leakage: {norm.standard!r}")
            return False

        is_sentence = _SENTENCE_END.search(norm.body) is not None
        is_noun_ending = _NOUN_END.search(norm.body) is not None
        if not (norm.has_code or is_sentence or is_noun_ending):
            # Permissive: only very short fragments are rejected
            if len(norm.key) < self.min_fragment_chars:
                logger.debug(f"Fragment: {norm.standard!r}")
                return False

        if candidate.unit and _WHITESPACE.sub("", candidate.unit) == norm.key:
            logger.debug(f"Unit heading echoed as standard: {norm.standard!r}")
            return False

        return True

    def _sanitize(self, record: CandidateRecord) -> CandidateRecord:
        # Sanitized up front rather than after deduplication, so artifact
        # variants of one standard share a key
        return CandidateRecord(
            unit=sanitize_text(record.unit),
            standard=sanitize_text(record.standard),
            element=sanitize_text(record.element),
            teaching_method=sanitize_text(record.teaching_method),
            notes=sanitize_text(record.notes),
        )

    def _finalize(self, record: CandidateRecord) -> FinalRecord:
        return FinalRecord(
            record_id=f"file-gen-{uuid.uuid4().hex}",
            unit=record.unit,
            standard=record.standard,
            element=record.element,
            teaching_method=record.teaching_method,
            notes=record.notes,
        )
