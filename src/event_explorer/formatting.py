"""Plain-text and JSON rendering of event sections."""

from .core.grouping import EventCard, Section
from .core.state import UiState

LOADING_TEXT = "Loading events..."
EMPTY_TEXT = "No events found."


def format_card(card: EventCard) -> str:
    """
    Format a single event card as an indented block.

    Pure function - no I/O.
    """
    event = card.event
    badges = [f"[{event.category}]"] if event.category else []
    if event.is_org_verified:
        badges.append("[Verified Org]")
    badges.append(f"[{card.status_label}]")

    lines = [f"- {event.title} {' '.join(badges)}"]
    if event.description:
        lines.append(f"    {event.description}")
    lines.append(f"    Event: {card.format_when()}")
    lines.append(f"    Venue: {event.venue}")

    if card.register_url:
        lines.append(f"    Register: {card.register_url}")
    if card.poster_url:
        lines.append(f"    View Poster: {card.poster_url}")
    else:
        lines.append("    (No Poster)")
    return "\n".join(lines)


def format_sections(sections: list[Section]) -> str:
    """Format sections as markdown-ish text, one heading per section."""
    if not sections:
        return EMPTY_TEXT

    blocks = []
    for section in sections:
        cards = "\n".join(format_card(c) for c in section.cards)
        blocks.append(f"### {section.title}\n{cards}")
    return "\n\n".join(blocks)


def format_view(state: UiState, sections: list[Section]) -> str:
    """What the explorer shows right now: a loading notice or the sections."""
    if state.loading:
        return LOADING_TEXT
    return format_sections(sections)


def serialize_card(card: EventCard) -> dict:
    event = card.event
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "venue": event.venue,
        "category": event.category,
        "status": card.status.value,
        "status_label": card.status_label,
        "registration_start": event.registration_start.isoformat(),
        "registration_end": event.registration_end.isoformat(),
        "event_start": event.event_start.isoformat(),
        "event_end": event.event_end.isoformat() if event.event_end else None,
        "is_org_verified": event.is_org_verified,
        "register_url": card.register_url,
        "poster_url": card.poster_url,
    }


def serialize_sections(sections: list[Section]) -> list[dict]:
    """JSON-ready structure mirroring the rendered sections."""
    return [
        {
            "status": section.status.value,
            "title": section.title,
            "events": [serialize_card(c) for c in section.cards],
        }
        for section in sections
    ]
