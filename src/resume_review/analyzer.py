"""Deterministic enhancement of LLM resume analyses.

ResumeAnalyzer calls an LLMService and then appends rule-based suggestions
and, for the general analysis, recomputes the score. The rules only look at
the parsed resume, so their output is the same whatever the model said.
"""

import logging
import re

from .exceptions import AnalysisError
from .llm import LLMService
from .schemas import AnalysisResult, ParsedResume, Suggestion, SuggestionType, clamp_score

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 50
MAX_LISTED_MISSING_KEYWORDS = 5

# Percentages, dollar amounts, comma-grouped numbers and durations.
QUANTIFIABLE_PATTERN = re.compile(
    r"\d+%|\$\s?\d+|\d+\$|\d+,\d+|\d+\s+(?:years?|months?)",
    re.IGNORECASE,
)

# Reference vocabulary matched against job descriptions, in reporting order.
SKILL_VOCABULARY = (
    "JavaScript",
    "TypeScript",
    "React",
    "Node.js",
    "Python",
    "Java",
    "AWS",
    "Docker",
    "Kubernetes",
    "SQL",
    "MongoDB",
    "PostgreSQL",
    "Git",
    "Agile",
    "Scrum",
    "Machine Learning",
    "Data Analysis",
    "Project Management",
    "Leadership",
    "Communication",
    "Problem Solving",
    "Team Collaboration",
)

# Score penalties
WARNING_PENALTY = 5
MISSING_NAME_PENALTY = 10
MISSING_EXPERIENCE_PENALTY = 20
MISSING_EDUCATION_PENALTY = 10
MISSING_TECHNICAL_SKILLS_PENALTY = 15


def has_quantifiable_achievements(parsed: ParsedResume) -> bool:
    """Check whether any experience description contains a metric."""
    return any(QUANTIFIABLE_PATTERN.search(exp.description or "") for exp in parsed.experience or [])


def evaluate_resume_rules(parsed: ParsedResume) -> list[Suggestion]:
    """Run the rule-based checks and return the suggestions they produce."""
    suggestions = []
    details = parsed.personal_details

    if not (details and details.email):
        suggestions.append(
            Suggestion(
                type=SuggestionType.WARNING,
                title="Missing Email",
                description="Add a professional email address to your contact information",
                section="personalDetails",
            )
        )

    if not (details and details.phone):
        suggestions.append(
            Suggestion(
                type=SuggestionType.WARNING,
                title="Missing Phone Number",
                description="Include a phone number for recruiters to contact you",
                section="personalDetails",
            )
        )

    if any(not exp.description or len(exp.description) < MIN_DESCRIPTION_LENGTH for exp in parsed.experience or []):
        suggestions.append(
            Suggestion(
                type=SuggestionType.INFO,
                title="Expand Experience Descriptions",
                description="Add more detailed descriptions of your accomplishments and responsibilities",
                section="experience",
            )
        )

    if not has_quantifiable_achievements(parsed):
        suggestions.append(
            Suggestion(
                type=SuggestionType.WARNING,
                title="Add Quantifiable Achievements",
                description="Include specific numbers, percentages, or metrics to demonstrate your impact",
                section="experience",
            )
        )

    return suggestions


def calculate_score(parsed: ParsedResume, suggestions: list[Suggestion]) -> int:
    """Compute the resume score from its content and the warnings raised.

    Starts at 100, takes 5 points per warning and a fixed penalty per missing
    section, and clamps the result to 0-100.
    """
    score = 100
    score -= WARNING_PENALTY * sum(1 for s in suggestions if s.type == SuggestionType.WARNING)

    if not (parsed.personal_details and parsed.personal_details.name):
        score -= MISSING_NAME_PENALTY
    if not parsed.experience:
        score -= MISSING_EXPERIENCE_PENALTY
    if not parsed.education:
        score -= MISSING_EDUCATION_PENALTY
    if not (parsed.skills and parsed.skills.technical):
        score -= MISSING_TECHNICAL_SKILLS_PENALTY

    return clamp_score(score)


def extract_keywords(text: str) -> list[str]:
    """Return the vocabulary skills mentioned in ``text``, case-insensitively."""
    text_lower = text.lower()
    return [skill for skill in SKILL_VOCABULARY if skill.lower() in text_lower]


def find_missing_keywords(parsed: ParsedResume, job_description: str) -> list[str]:
    """Vocabulary skills the job asks for that the resume never mentions."""
    resume_text = parsed.as_json(indent=None).lower()
    return [keyword for keyword in extract_keywords(job_description) if keyword.lower() not in resume_text]


def enhance_analysis(analysis: AnalysisResult, parsed: ParsedResume) -> AnalysisResult:
    """Append rule suggestions to an LLM analysis and recompute its score."""
    suggestions = [*analysis.suggestions, *evaluate_resume_rules(parsed)]
    score = calculate_score(parsed, suggestions)

    analysis.suggestions = suggestions
    analysis.score = score
    return analysis


def enhance_job_match_analysis(analysis: AnalysisResult, parsed: ParsedResume, job_description: str) -> AnalysisResult:
    """Flag vocabulary skills from the job that the resume is missing."""
    missing_keywords = find_missing_keywords(parsed, job_description)
    suggestions = list(analysis.suggestions)

    if missing_keywords:
        suggestions.append(
            Suggestion(
                type=SuggestionType.WARNING,
                title="Missing Key Skills",
                description=(
                    "Consider adding these relevant skills: "
                    + ", ".join(missing_keywords[:MAX_LISTED_MISSING_KEYWORDS])
                ),
                section="skills",
            )
        )

    keywords = [*(analysis.keywords or []), *missing_keywords]

    analysis.suggestions = suggestions
    analysis.keywords = keywords
    return analysis


class ResumeAnalyzer:
    """Run LLM analyses and enhance them with deterministic checks."""

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    def analyze_resume(self, parsed: ParsedResume) -> AnalysisResult:
        """Analyze a parsed resume; the returned score is always recomputed.

        Raises:
            AnalysisError: If the LLM call fails.
        """
        try:
            analysis = self.llm_service.analyze_resume(parsed)
        except Exception as e:
            logger.error(f"Resume analysis failed: {e}")
            raise AnalysisError("analysis", f"Failed to analyze resume: {e}") from e

        llm_score = analysis.score
        enhanced = enhance_analysis(analysis, parsed)
        logger.info(
            f"Resume analysis done: score {llm_score} -> {enhanced.score}, {len(enhanced.suggestions)} suggestions"
        )
        return enhanced

    def analyze_job_match(self, parsed: ParsedResume, job_description: str) -> AnalysisResult:
        """Match a parsed resume against a job description.

        Raises:
            AnalysisError: If the LLM call fails.
        """
        try:
            analysis = self.llm_service.analyze_job_match(parsed, job_description)
        except Exception as e:
            logger.error(f"Job match analysis failed: {e}")
            raise AnalysisError("job_match", f"Failed to analyze job match: {e}") from e

        enhanced = enhance_job_match_analysis(analysis, parsed, job_description)
        logger.info(f"Job match done: score {enhanced.score}, {len(enhanced.keywords or [])} keywords")
        return enhanced
