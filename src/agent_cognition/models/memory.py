# agent_cognition/models/memory.py
"""
Memory models.

Agent memory is fixed-size and organized into:
- self: identity, values, curiosity, style (the ego)
- core: skills and patterns (transferable knowledge)
- projects: context-specific facts, isolated per project
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from .identity import utc_now

KIB = 1024


class CoreSection(str, Enum):
    """Named sections of core memory."""

    SKILLS = "skills"
    PATTERNS = "patterns"
    VISUAL_PATTERNS = "visual_patterns"


class MemoryEntry(BaseModel):
    """A single learned memory."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    content: str
    created_at: datetime = Field(default_factory=utc_now)
    last_accessed_at: datetime = Field(default_factory=utc_now)
    access_count: int = Field(default=0, ge=0)
    confidence: float = Field(default=0.5, ge=0, le=1)
    tags: list[str] = Field(default_factory=list)

    def touch(self, now: datetime | None = None) -> None:
        """Record an access."""
        self.last_accessed_at = now or utc_now()
        self.access_count += 1


class CoreMemory(BaseModel):
    """Transferable knowledge, persisted as one record."""

    skills: list[MemoryEntry] = Field(default_factory=list)
    patterns: list[MemoryEntry] = Field(default_factory=list)
    visual_patterns: list[MemoryEntry] = Field(default_factory=list)

    def section(self, section: CoreSection) -> list[MemoryEntry]:
        return getattr(self, section.value)

    def set_section(self, section: CoreSection, entries: list[MemoryEntry]) -> None:
        setattr(self, section.value, entries)

    def find(self, section: CoreSection, entry_id: str) -> MemoryEntry | None:
        return next((e for e in self.section(section) if e.id == entry_id), None)

    @property
    def entry_count(self) -> int:
        return sum(len(self.section(s)) for s in CoreSection)


# =============================================================================
# Project memory
# =============================================================================


class MemoryPointer(BaseModel):
    """Pointer to content that lives outside memory."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    description: str
    type: Literal["file", "url", "message", "pointer"]
    reference: str
    created_at: datetime = Field(default_factory=utc_now)
    last_accessed_at: datetime = Field(default_factory=utc_now)


class PersonMemory(BaseModel):
    """What the agent knows about a user or another agent."""

    entity_id: str
    entity_type: Literal["user", "agent"]
    notes: str = ""
    preferences: str = ""
    last_interaction: datetime = Field(default_factory=utc_now)


class ProjectMemory(BaseModel):
    """Facts scoped to one project."""

    project_id: str
    facts: list[MemoryEntry] = Field(default_factory=list)
    pointers: list[MemoryPointer] = Field(default_factory=list)
    people: list[PersonMemory] = Field(default_factory=list)


# =============================================================================
# Self memory
# =============================================================================


class CuriosityQuestion(BaseModel):
    question: str
    interest: float = Field(default=0.5, ge=0, le=1)
    added_at: datetime = Field(default_factory=utc_now)
    explored_at: datetime | None = None


class CuriosityFinding(BaseModel):
    question: str
    finding: str
    saved_to: str
    found_at: datetime = Field(default_factory=utc_now)


class CuriosityState(BaseModel):
    questions: list[CuriosityQuestion] = Field(default_factory=list)
    recent_findings: list[CuriosityFinding] = Field(default_factory=list)


class AgentGoals(BaseModel):
    short: str = ""
    long: str = ""


class AgentStyle(BaseModel):
    tone: str = "friendly and professional"
    emoji_usage: Literal["minimal", "moderate", "expressive"] = "minimal"
    favorite_emoji: list[str] = Field(default_factory=list)


class AgentSelf(BaseModel):
    """The ego: how the agent sees itself."""

    identity: str = "A new agent awaiting configuration"
    values: str = "Be helpful. Be honest. Respect autonomy."
    curiosity: CuriosityState = Field(default_factory=CuriosityState)
    goals: AgentGoals = Field(default_factory=AgentGoals)
    style: AgentStyle = Field(default_factory=AgentStyle)


# =============================================================================
# Budget
# =============================================================================


class MemoryBudget(BaseModel):
    """Byte budgets per memory domain."""

    self_max_bytes: int = Field(default=100 * KIB, gt=0)
    core_max_bytes: int = Field(default=500 * KIB, gt=0)
    project_max_bytes: int = Field(default=200 * KIB, gt=0)
    max_projects: int = Field(default=20, gt=0)


class MemoryUsage(BaseModel):
    """Bytes currently stored per memory domain."""

    self_bytes: int = 0
    core_bytes: int = 0
    projects: dict[str, int] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.self_bytes + self.core_bytes + sum(self.projects.values())
