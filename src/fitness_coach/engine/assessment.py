"""Map movement-assessment findings to corrective exercises."""

from typing import Any, Iterable, Mapping, Union

from fitness_coach.models.session import CorrectiveExercise

# (keywords, corrective). Rules are additive: every rule whose keyword appears fires once.
CORRECTIVE_RULES: tuple[tuple[tuple[str, ...], CorrectiveExercise], ...] = (
    (
        ("valgus",),
        CorrectiveExercise(
            name="Lateral band walks", sets=2, reps="x12/side", rest_sec=30, cue="Knees track over toes."
        ),
    ),
    (
        ("trunk", "lean"),
        CorrectiveExercise(name="Dead bug", sets=2, reps="x8/side", rest_sec=30, cue="Ribs down. Slow."),
    ),
)

DEFAULT_CORRECTIVE = CorrectiveExercise(
    name="90/90 breathing", sets=2, reps="x5 breaths", rest_sec=15, cue="Exhale fully. Brace gently."
)

Findings = Union[Iterable[Any], Mapping[str, Any], None]


def _finding_texts(findings: Findings) -> list[str]:
    if findings is None:
        return []
    if isinstance(findings, Mapping):
        findings = findings.get("findings") or []
    if isinstance(findings, str):
        findings = [findings]
    return [f.lower() for f in findings if isinstance(f, str)]


def correctives_for(findings: Findings) -> list[CorrectiveExercise]:
    """
    Choose corrective exercises for assessment findings.

    Args:
        findings: Finding strings, or an assessment summary with a "findings" list

    Returns:
        Correctives in rule order; the default breathing drill when no rule fires
    """
    texts = _finding_texts(findings)
    correctives = [
        corrective.model_copy(deep=True)
        for keywords, corrective in CORRECTIVE_RULES
        if any(keyword in text for keyword in keywords for text in texts)
    ]
    if not correctives:
        correctives.append(DEFAULT_CORRECTIVE.model_copy(deep=True))
    return correctives

