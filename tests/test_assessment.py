"""Tests for mapping assessment findings to correctives."""

from fitness_coach.engine.assessment import DEFAULT_CORRECTIVE, correctives_for


def names(correctives):
    return [c.name for c in correctives]


class TestCorrectivesFor:
    """Test corrective rule matching."""

    def test_knee_valgus(self):
        """A valgus finding selects the knee-tracking drill, not the default."""
        result = correctives_for(["knee valgus on left"])
        assert names(result) == ["Lateral band walks"]
        assert result[0].cue == "Knees track over toes."

    def test_no_findings_gives_default(self):
        """No findings returns exactly the breathing drill."""
        assert names(correctives_for([])) == ["90/90 breathing"]
        assert names(correctives_for(None)) == ["90/90 breathing"]

    def test_rules_are_additive(self):
        """Several findings can trigger several correctives, in rule order."""
        result = correctives_for(["Forward trunk lean", "Knee VALGUS"])
        assert names(result) == ["Lateral band walks", "Dead bug"]

    def test_each_rule_fires_once(self):
        """Repeated keywords do not duplicate a corrective."""
        result = correctives_for(["trunk lean", "lean at bottom", "trunk rotation"])
        assert names(result) == ["Dead bug"]

    def test_assessment_summary_mapping(self):
        """An assessment summary with a findings list is accepted."""
        assert names(correctives_for({"findings": ["valgus"]})) == ["Lateral band walks"]

    def test_single_string_finding(self):
        """A bare string is treated as one finding."""
        assert names(correctives_for("slight trunk lean")) == ["Dead bug"]

    def test_non_string_findings_are_ignored(self):
        """Unreadable findings fall back to the default."""
        assert names(correctives_for([1, None, {"x": 1}])) == ["90/90 breathing"]

    def test_unmatched_findings_give_default(self):
        """Findings without a rule fall back to the default."""
        assert names(correctives_for(["shoulder shrug"])) == ["90/90 breathing"]

    def test_results_are_copies(self):
        """Editing a returned corrective does not change the rule table."""
        result = correctives_for([])
        result[0].name = "Edited"
        assert DEFAULT_CORRECTIVE.name == "90/90 breathing"
