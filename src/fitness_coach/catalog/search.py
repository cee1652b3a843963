"""Free-text and facet search over the exercise catalog."""

from typing import Any, Iterable, Mapping, Optional, Union

from fitness_coach.models.exercise import ExerciseRecord, SearchFacets


def normalize(value: Any) -> str:
    """Lower-case and trim a value for comparison; None becomes ''."""
    return ("" if value is None else str(value)).lower().strip()


def _coerce_facets(facets: Union[SearchFacets, Mapping[str, Any], None]) -> SearchFacets:
    if facets is None:
        return SearchFacets()
    if isinstance(facets, SearchFacets):
        return facets
    return SearchFacets(
        category=facets.get("category"),
        equipment=facets.get("equipment"),
        muscle=facets.get("muscle"),
    )


def matches(
    record: ExerciseRecord,
    query: str = "",
    facets: Union[SearchFacets, Mapping[str, Any], None] = None,
) -> bool:
    """Check a single record against a query and facets."""
    q = normalize(query)
    wanted = _coerce_facets(facets)

    primary = [normalize(m) for m in record.primary_muscles]
    secondary = [normalize(m) for m in record.secondary_muscles]
    category = normalize(record.category)
    equipment = normalize(record.equipment)

    if q:
        haystack = [normalize(record.name), normalize(record.id), category, equipment]
        if not any(q in field for field in haystack + primary + secondary):
            return False

    # Facets are exact (case-insensitive) and all must hold
    category_facet = normalize(wanted.category)
    if category_facet and category != category_facet:
        return False
    equipment_facet = normalize(wanted.equipment)
    if equipment_facet and equipment != equipment_facet:
        return False
    muscle_facet = normalize(wanted.muscle)
    if muscle_facet and muscle_facet not in primary and muscle_facet not in secondary:
        return False

    return True


def search(
    catalog: Iterable[ExerciseRecord],
    query: str = "",
    facets: Optional[Union[SearchFacets, Mapping[str, Any]]] = None,
) -> list[ExerciseRecord]:
    """
    Search the catalog, preserving catalog order.

    Args:
        catalog: An ExerciseCatalog or any iterable of records
        query: Free text matched as a substring of name, id, category,
            equipment or any muscle tag. Empty matches everything.
        facets: Optional category / equipment / muscle filters

    Returns:
        Matching records; an empty list when nothing matches
    """
    wanted = _coerce_facets(facets)
    return [record for record in catalog if matches(record, query, wanted)]
