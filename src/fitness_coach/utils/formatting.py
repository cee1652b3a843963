"""Plain-text rendering of program days and workout sessions."""

from fitness_coach.models.program import DayPlan
from fitness_coach.models.session import WorkoutSession


def format_day_summary(day: DayPlan) -> str:
    """Render a program day as readable text: label and focus, then each block."""
    lines = [f"**{day.label or ''}** — {day.focus or ''}"]
    for block in day.blocks:
        lines.append("")
        lines.append(f"{block.type.upper()}: {block.description}")
        for item in block.items:
            lines.append(f" • {item}")
    return "\n".join(lines)


def render_plan_text(session: WorkoutSession, days_per_week: int = 4) -> str:
    """Render a generated session as the plan text shown to the athlete."""
    blocks = session.blocks
    lines = ["Today's Program (Exercise DB)", f"Schedule: {days_per_week} days/week", ""]

    lines.append("Warm-up:")
    lines.extend(f"- {w.name} {w.reps}" for w in blocks.warmup)
    lines.append("")

    lines.append("Corrective:")
    lines.extend(f"- {c.name} — {c.sets}×{c.reps}" for c in blocks.corrective)
    lines.append("")

    lines.append(f"Strength ({blocks.strength[0].sets if blocks.strength else 0} rounds):")
    lines.extend(f"{s.slot}) {s.name} — {s.sets} sets × {s.reps} | rest {s.rest_sec}s" for s in blocks.strength)
    lines.append("")

    lines.append("Finisher:")
    lines.extend(f"- {f.name} — {f.reps}" for f in blocks.finisher)
    lines.append("")

    lines.append("Coach focus: slow reps, brace first, perfect form.")
    return "\n".join(lines)


def primary_exercise_name(session: WorkoutSession) -> str:
    """Name of the first strength exercise, used as the session headline."""
    if session.blocks.strength and session.blocks.strength[0].name.strip():
        return session.blocks.strength[0].name
    return "Bodyweight Squat"


def summarize_strength(session: WorkoutSession, limit: int = 4) -> str:
    """One-line list of the strength exercises."""
    names = [s.name for s in session.blocks.strength[:limit] if s.name]
    return " • ".join(names) if names else "—"


def format_status(status: str) -> str:
    """Short status label for history listings."""
    labels = {"completed": "completed", "in_progress": "in progress"}
    return labels.get(status, "planned")
