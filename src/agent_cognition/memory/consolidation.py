# agent_cognition/memory/consolidation.py
"""
Memory consolidation ("sleep").

One consolidation cycle over core memory:
1. Summarize verbose entries (LLM rewrite, kept only if markedly shorter)
2. Merge similar entries within skills and patterns
3. Rank every section by hotness (access count damped by age)
4. Evict cold, old entries while the record is over its byte budget

Every phase is non-expansive, so a cycle never grows the serialized record.
Eviction is a soft cap: hot or young entries are never evicted, even if the
record stays over budget.

The consolidator takes no locks. Callers must ensure a single consolidation
per store at a time (see SleepManager and CognitiveAgent).
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from agent_cognition.config import DEFAULT_MODEL
from agent_cognition.llm.provider import LLMProvider, complete_text
from agent_cognition.models import CoreMemory, CoreSection, MemoryEntry, utc_now

from .store import MemoryStore, serialized_size

logger = logging.getLogger(__name__)

# Sections that are summarized and merged; all sections are ranked and evicted
TEXT_SECTIONS = (CoreSection.PATTERNS, CoreSection.SKILLS)
EVICTION_ORDER = (CoreSection.PATTERNS, CoreSection.SKILLS, CoreSection.VISUAL_PATTERNS)

SECONDS_PER_DAY = 86_400

SUMMARIZE_PROMPT = (
    "You are a memory summarizer. Compress the following memory into a concise form "
    "while preserving key insights. Output only the summary, nothing else."
)
SIMILARITY_PROMPT = (
    "Compare these two memories and output a similarity score from 0.0 to 1.0. Output only the number."
)
MERGE_PROMPT = (
    "Merge these two related memories into a single, concise memory that captures "
    "the essence of both. Output only the merged memory."
)

# =============================================================================
# Models
# =============================================================================


class ConsolidationConfig(BaseModel):
    """Tuning for a consolidation cycle."""

    min_age_for_eviction: timedelta = Field(default=timedelta(days=7))
    cold_access_threshold: int = Field(default=2, description="Entries below this access count are cold")
    max_entries_per_section: int = Field(default=100, description="Merge compares at most this many entries")
    merge_similarity_threshold: float = Field(default=0.8)
    tag_overlap_floor: float = Field(default=0.3, description="Below this, tag overlap alone is the similarity")
    summarize_min_chars: int = Field(default=500)
    summarize_max_ratio: float = Field(default=0.7, description="Summary must be at most this fraction of the original")
    summarize_max_tokens: int = 200
    merge_max_tokens: int = 300
    similarity_max_tokens: int = 10


class ConsolidationResult(BaseModel):
    """Outcome of one cycle. Returned to the caller only."""

    summarized: int = 0
    merged: int = 0
    evicted: int = 0
    bytes_after: int = 0
    duration_ms: float = 0.0

    @property
    def memories_touched(self) -> int:
        return self.summarized + self.merged


# =============================================================================
# Helpers
# =============================================================================


def _json_bytes(text: str) -> int:
    """Bytes a string occupies inside the serialized record."""
    return len(json.dumps(text, ensure_ascii=False).encode("utf-8"))


def tag_overlap(a: MemoryEntry, b: MemoryEntry) -> float:
    """Shared tags divided by the larger tag set."""
    shared = set(a.tags) & set(b.tags)
    return len(shared) / max(len(set(a.tags)), len(set(b.tags)), 1)


def hotness(entry: MemoryEntry, now: datetime) -> float:
    """accessCount / (age in days + 1), age measured from the last access."""
    age_days = max(0.0, (now - entry.last_accessed_at).total_seconds() / SECONDS_PER_DAY)
    return entry.access_count / (age_days + 1)


# =============================================================================
# Consolidator
# =============================================================================


class MemoryConsolidator:
    """
    Batch summarize/merge/rank/evict pass over a store's core memory.

    LLM failures while summarizing one entry or judging/merging one pair are
    logged and that entry or pair is skipped; the cycle continues.
    """

    def __init__(
        self,
        store: MemoryStore,
        llm: LLMProvider,
        config: ConsolidationConfig | None = None,
        model: str = DEFAULT_MODEL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.llm = llm
        self.config = config or ConsolidationConfig()
        self.model = model
        self._clock = clock

    async def consolidate(self) -> ConsolidationResult:
        """Run a full consolidation cycle and persist the result."""
        started = time.perf_counter()
        core = await self.store.get_core()
        original = core.model_copy(deep=True)
        max_bytes = self.store.get_budget().core_max_bytes
        now = self._clock()

        summarized = 0
        for section in TEXT_SECTIONS:
            summarized += await self._summarize_section(core, section)

        merged = 0
        for section in TEXT_SECTIONS:
            merged += await self._merge_section(core, section)

        for section in CoreSection:
            self._sort_by_hotness(core.section(section), now)

        evicted = 0
        if serialized_size(core) > max_bytes:
            evicted = self._evict_cold_entries(core, max_bytes, now)
            if serialized_size(core) > max_bytes:
                logger.warning(f"Core memory still over budget after eviction ({serialized_size(core)} > {max_bytes})")

        if core != original:
            await self.store.save_core(core)

        result = ConsolidationResult(
            summarized=summarized,
            merged=merged,
            evicted=evicted,
            bytes_after=serialized_size(core),
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        logger.info(
            f"Consolidation complete: summarized={summarized} merged={merged} "
            f"evicted={evicted} bytes_after={result.bytes_after}"
        )
        return result

    # ------------------------------------------------------------------
    # Phase 1: summarize
    # ------------------------------------------------------------------

    async def _summarize_section(self, core: CoreMemory, section: CoreSection) -> int:
        cfg = self.config
        summarized = 0

        for entry in core.section(section):
            if len(entry.content) < cfg.summarize_min_chars:
                continue

            try:
                summary = await complete_text(
                    self.llm,
                    SUMMARIZE_PROMPT,
                    entry.content,
                    max_tokens=cfg.summarize_max_tokens,
                    model=self.model,
                )
            except Exception as e:
                logger.warning(f"Summarize failed for {section.value}/{entry.id}, skipping: {e}")
                continue

            short_enough = 0 < len(summary) <= len(entry.content) * cfg.summarize_max_ratio
            if short_enough and _json_bytes(summary) < _json_bytes(entry.content):
                entry.content = summary
                summarized += 1
            else:
                logger.debug(f"Discarded summary for {entry.id}: {len(summary)} vs {len(entry.content)} chars")

        return summarized

    # ------------------------------------------------------------------
    # Phase 2: merge
    # ------------------------------------------------------------------

    async def _merge_section(self, core: CoreMemory, section: CoreSection) -> int:
        entries = core.section(section)
        if len(entries) < 2:
            return 0

        window = entries[: self.config.max_entries_per_section]
        if len(window) < len(entries):
            logger.debug(f"Merge in {section.value} limited to {len(window)} of {len(entries)} entries")

        removed: set[str] = set()
        merged = 0

        for i, first in enumerate(window):
            if first.id in removed:
                continue
            for second in window[i + 1 :]:
                if second.id in removed:
                    continue

                try:
                    similarity = await self.calculate_similarity(first, second)
                    if similarity <= self.config.merge_similarity_threshold:
                        continue
                    content = await self._merge_contents(first, second)
                except Exception as e:
                    logger.warning(f"Merge failed for {first.id}/{second.id}, skipping: {e}")
                    continue

                # Merged text may not outgrow the two originals
                if not content or _json_bytes(content) > _json_bytes(first.content) + _json_bytes(second.content):
                    logger.debug(f"Rejected merge of {first.id}/{second.id}: merged text too long")
                    continue

                first.content = content
                first.access_count += second.access_count
                first.tags = list(dict.fromkeys([*first.tags, *second.tags]))
                removed.add(second.id)
                merged += 1

        if removed:
            core.set_section(section, [e for e in entries if e.id not in removed])
        return merged

    async def calculate_similarity(self, a: MemoryEntry, b: MemoryEntry) -> float:
        """Tag overlap, blended 50/50 with an LLM judgement when tags overlap enough."""
        overlap = tag_overlap(a, b)
        if overlap < self.config.tag_overlap_floor:
            return overlap

        response = await complete_text(
            self.llm,
            SIMILARITY_PROMPT,
            f"Memory A: {a.content}\n\nMemory B: {b.content}",
            max_tokens=self.config.similarity_max_tokens,
            model=self.model,
        )
        try:
            score = float(response)
        except ValueError:
            logger.debug(f"Unparseable similarity score {response!r}, using tag overlap")
            return overlap
        return (overlap + min(1.0, max(0.0, score))) / 2

    async def _merge_contents(self, a: MemoryEntry, b: MemoryEntry) -> str:
        return await complete_text(
            self.llm,
            MERGE_PROMPT,
            f"Memory A: {a.content}\n\nMemory B: {b.content}",
            max_tokens=self.config.merge_max_tokens,
            model=self.model,
        )

    # ------------------------------------------------------------------
    # Phase 3: rank
    # ------------------------------------------------------------------

    @staticmethod
    def _sort_by_hotness(entries: list[MemoryEntry], now: datetime) -> None:
        entries.sort(key=lambda e: hotness(e, now), reverse=True)

    # ------------------------------------------------------------------
    # Phase 4: evict
    # ------------------------------------------------------------------

    def _evict_cold_entries(self, core: CoreMemory, max_bytes: int, now: datetime) -> int:
        cfg = self.config
        evicted = 0

        for section in EVICTION_ORDER:
            while serialized_size(core) > max_bytes:
                entries = core.section(section)
                # Sections are sorted hottest first, so scan from the tail
                victim = next(
                    (
                        e
                        for e in reversed(entries)
                        if e.access_count < cfg.cold_access_threshold
                        and now - e.created_at > cfg.min_age_for_eviction
                    ),
                    None,
                )
                if victim is None:
                    break
                entries.remove(victim)
                evicted += 1
                logger.debug(f"Evicted {section.value}/{victim.id}")

        return evicted
