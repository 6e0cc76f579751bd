from __future__ import annotations

import re

from screener.schemas.candidate import CandidateFields

KNOWN_SKILLS: tuple[str, ...] = (
    "Java",
    "Spring Boot",
    "Python",
    "Node.js",
    "JavaScript",
    "TypeScript",
    "React",
    "Angular",
    "AWS",
    "Docker",
    "Kubernetes",
    "Spark",
    "Hadoop",
    "SQL",
    "NoSQL",
    "Kafka",
)

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Also matches long ids and dates.
_PHONE_RE = re.compile(r"\+?\d[\d\s-]{8,15}", re.ASCII)
_LINE_SPLIT_RE = re.compile(r"\r?\n")
_DIGIT_RE = re.compile(r"\d", re.ASCII)
_NAME_SCAN_LINES = 8
_NAME_MAX_TOKENS = 5
_TITLE_MARKERS = ("resume", "curriculum", "vitae")


def extract_email(text: str) -> str | None:
    match = _EMAIL_RE.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> str | None:
    match = _PHONE_RE.search(text)
    return match.group(0) if match else None


def _non_blank_lines(text: str) -> list[str]:
    lines = (line.strip() for line in _LINE_SPLIT_RE.split(text))
    return [line for line in lines if line]


def extract_name(text: str) -> str | None:
    for line in _non_blank_lines(text)[:_NAME_SCAN_LINES]:
        lowered = line.lower()
        if any(marker in lowered for marker in _TITLE_MARKERS):
            continue
        if "@" in line:
            continue
        if _DIGIT_RE.search(line):
            continue
        if len(line.split()) <= _NAME_MAX_TOKENS:
            return line
    return None


def extract_skills(text: str, vocabulary: tuple[str, ...] = KNOWN_SKILLS) -> list[str]:
    lowered = text.lower()
    found = {skill for skill in vocabulary if skill.lower() in lowered}
    return sorted(found)


def parse_candidate_fields(text: str) -> CandidateFields:
    return CandidateFields(
        name=extract_name(text),
        email=extract_email(text),
        phone=extract_phone(text),
        skills=extract_skills(text),
    )
