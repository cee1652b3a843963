"""MCP tools for exercise catalog queries."""

from typing import Any

from fitness_coach.catalog.index import ExerciseCatalog
from fitness_coach.catalog.search import search


def register_exercise_tools(mcp, catalog: ExerciseCatalog):
    """Register exercise catalog MCP tools."""

    @mcp.tool()
    def search_exercises(
        query: str = "",
        category: str | None = None,
        equipment: str | None = None,
        muscle: str | None = None,
        limit: int = 25,
    ) -> dict[str, Any]:
        """
        Search the exercise catalog.

        Args:
            query: Free text matched against name, id, category, equipment and muscles
            category: Exact category filter (e.g. "strength", "stretching")
            equipment: Exact equipment filter (e.g. "body only", "dumbbell")
            muscle: Muscle that must be a primary or secondary target
            limit: Maximum number of results to return (default: 25)

        Returns:
            Dictionary with matching exercises and the total match count
        """
        try:
            results = search(catalog, query, {"category": category, "equipment": equipment, "muscle": muscle})
            return {
                "data": {
                    "exercises": [ex.model_dump(by_alias=True) for ex in results[:limit]],
                    "count": len(results),
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def get_exercise(exercise_id: str) -> dict[str, Any]:
        """
        Get a single exercise by id.

        Args:
            exercise_id: Catalog id of the exercise

        Returns:
            Dictionary containing the exercise record
        """
        exercise = catalog.lookup(exercise_id)
        if exercise is None:
            return {"error": f"Exercise not found: {exercise_id}"}
        return {"data": exercise.model_dump(by_alias=True)}
