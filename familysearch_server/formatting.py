"""Text formatting for search results, person details and user info.

All functions are pure: raw API dicts in, text out.
"""

from .helpers import as_text, dig, strip_type_uri
from .models import Person, describe_fact

NO_PERSONS_FOUND = "No persons found matching your search criteria."
NO_RECORDS_FOUND = "No records found matching your search criteria."


def summarize_person_entry(entry: dict) -> dict:
    """Fields shared by tree-person and historical-record search entries."""
    raw_person = dig(entry, "content", "gedcomx", "persons", 0)
    person = Person.from_gedcomx(raw_person if isinstance(raw_person, dict) else {})
    return {
        "id": as_text(entry.get("id")) or "Unknown",
        "name": as_text(entry.get("title")) or "Unknown",
        "gender": strip_type_uri(as_text(dig(raw_person, "gender", "type"))) or "Unknown",
        "birth": describe_fact(person.birth),
        "death": describe_fact(person.death),
    }


def summarize_record_entry(entry: dict) -> dict:
    summary = summarize_person_entry(entry)
    full_text = as_text(
        dig(entry, "content", "gedcomx", "persons", 0, "names", 0, "nameForms", 0, "fullText")
    )
    if full_text:
        summary["name"] = full_text
    summary["collection"] = (
        as_text(dig(entry, "content", "gedcomx", "description", "title")) or "Unknown collection"
    )
    return summary


def _numbered(blocks: list[str]) -> str:
    return "\n\n".join(f"{i}. {block}" for i, block in enumerate(blocks, start=1))


def format_person_results(entries: list[dict]) -> str:
    if not entries:
        return NO_PERSONS_FOUND
    blocks = []
    for entry in entries:
        s = summarize_person_entry(entry)
        blocks.append(
            f"{s['name']} ({s['id']})\n"
            f"   Gender: {s['gender']}\n"
            f"   Birth: {s['birth']}\n"
            f"   Death: {s['death']}"
        )
    return f"Found {len(entries)} matching records:\n\n{_numbered(blocks)}"


def format_record_results(entries: list[dict]) -> str:
    if not entries:
        return NO_RECORDS_FOUND
    blocks = []
    for entry in entries:
        s = summarize_record_entry(entry)
        blocks.append(
            f"{s['name']} ({s['id']})\n"
            f"   Gender: {s['gender']}\n"
            f"   Birth: {s['birth']}\n"
            f"   Death: {s['death']}\n"
            f"   Collection: {s['collection']}"
        )
    return f"Found {len(entries)} matching records:\n\n{_numbered(blocks)}"


def format_person_details(person_id: str, raw_person: dict) -> str:
    person = Person.from_gedcomx(raw_person)
    if person.facts:
        facts = "\n   ".join(f"{fact.label}: {describe_fact(fact)}" for fact in person.facts)
    else:
        facts = "No facts available"
    return (
        "Person Details:\n"
        f"ID: {person_id}\n"
        f"Name: {person.name}\n"
        f"Gender: {person.gender.value}\n"
        "\n"
        f"Facts:\n   {facts}"
    )


def format_current_user(user: dict) -> str:
    if not isinstance(user, dict):
        user = {}
    name = as_text(user.get("displayName")) or as_text(user.get("contactName")) or "Unknown"
    user_id = as_text(user.get("id")) or "Unknown"
    return f"Current user: {name}\nID: {user_id}"
