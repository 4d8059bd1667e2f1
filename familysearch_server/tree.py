"""Ancestor and descendant tree reconstruction from flat GEDCOM X payloads.

The API answers ancestry/descendancy queries with a flat list of persons and
a flat list of relationships. These functions rebuild the tree rooted at one
person and render it as indented text, one line per person per path.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Literal

from .constants import ANCESTOR_GENERATIONS, DESCENDANT_GENERATIONS, PARENT_CHILD
from .helpers import dict_items, dig
from .models import Gender, Person, Relationship

Direction = Literal["ancestors", "descendants"]

INDENT = "  "


def clamp_generations(requested: int | None, default: int, ceiling: int) -> int:
    """Clamp a requested generation count into [1, ceiling].

    None or 0 means "use the default"; negative values become 1.
    """
    if not requested:
        return default
    return max(1, min(requested, ceiling))


def build_relationship_index(
    relationships: Iterable[Relationship], direction: Direction
) -> dict[str, list[str]]:
    """Map each person to its parents (ancestors) or children (descendants).

    Only ParentChild edges with both endpoints count. Values keep the order
    the edges arrived in, duplicates included.
    """
    index: dict[str, list[str]] = {}
    for rel in relationships:
        if rel.type != PARENT_CHILD or not rel.person1_id or not rel.person2_id:
            continue
        if direction == "ancestors":
            key, value = rel.person2_id, rel.person1_id
        else:
            key, value = rel.person1_id, rel.person2_id
        index.setdefault(key, []).append(value)
    return index


def build_person_table(persons: Iterable[Person]) -> dict[str, Person]:
    return {p.id: p for p in persons if p.id}


def parent_label(person: Person) -> str:
    # Anything not explicitly male is rendered as a mother.
    return "Father" if person.gender is Gender.MALE else "Mother"


def child_label(person: Person) -> str:
    return "Child"


def render_branch(
    person_id: str,
    index: dict[str, list[str]],
    persons: dict[str, Person],
    max_generation: int,
    label: Callable[[Person], str],
    generation: int = 1,
    path: frozenset[str] = frozenset(),
) -> list[str]:
    """Depth-first render of everyone reachable from person_id.

    path holds the ids between the root and person_id; a relative already on
    it would close a cycle and is skipped. Relatives reached by two different
    paths are rendered on both.
    """
    path = path | {person_id}
    lines = []
    for relative_id in index.get(person_id, []):
        relative = persons.get(relative_id)
        if relative is None or relative_id in path:
            continue
        lines.append(f"{INDENT * generation}{label(relative)}: {relative.to_summary()}")
        if generation < max_generation:
            lines.extend(
                render_branch(
                    relative_id, index, persons, max_generation, label, generation + 1, path
                )
            )
    return lines


def render_tree(
    root_id: str,
    persons: Iterable[Person],
    relationships: Iterable[Relationship],
    direction: Direction,
    generations: int,
) -> list[str] | None:
    """Render the tree rooted at root_id.

    Returns None when root_id is not among the persons, otherwise the root
    line followed by one line per relative (or a placeholder when there are
    none).
    """
    table = build_person_table(persons)
    root = table.get(root_id)
    if root is None:
        return None

    index = build_relationship_index(relationships, direction)
    label = parent_label if direction == "ancestors" else child_label
    branch = render_branch(root_id, index, table, generations, label)

    lines = [f"Root: {root.to_summary()}"]
    if branch:
        lines.extend(branch)
    else:
        lines.append(f"{INDENT}(no {direction} recorded)")
    return lines


def format_tree(
    root_id: str,
    payload: dict,
    direction: Direction,
    generations: int,
) -> str:
    """Turn an ancestry/descendancy API payload into the tool's text result."""
    raw_persons = dict_items(dig(payload, "persons"))
    if not raw_persons:
        return f"No {direction} found for person with ID: {root_id}"

    raw_relationships = dict_items(dig(payload, "relationships"))
    lines = render_tree(
        root_id,
        [Person.from_gedcomx(p) for p in raw_persons],
        [Relationship.from_gedcomx(r) for r in raw_relationships],
        direction,
        generations,
    )
    if lines is None:
        return "Could not find the requested person in the response."

    title = direction.capitalize()
    return f"{title} ({generations} generations):\n\n" + "\n".join(lines)


def ancestor_generations(requested: int | None) -> int:
    return clamp_generations(requested, *ANCESTOR_GENERATIONS)


def descendant_generations(requested: int | None) -> int:
    return clamp_generations(requested, *DESCENDANT_GENERATIONS)
