"""Fixed theme vocabulary used to classify a user's feeling."""

from __future__ import annotations

from enum import StrEnum


class Label(StrEnum):
    SABR = "Sabr"
    DUA = "Dua"
    TAWAKKUL = "Tawakkul"
    SHUKR = "Shukr"
    TAWBAH = "Tawbah"
    DHIKR = "Dhikr"
    IMAN = "Iman"
    IKHLAS = "Ikhlas"
    LONELINESS = "Loneliness"
    ANXIETY = "Anxiety"
    GRIEF = "Grief"
    HOPE = "Hope"
    GRATITUDE = "Gratitude"
    PURPOSE = "Purpose"
    FORGIVENESS = "Forgiveness"
    LOVE = "Love"
    ANGER = "Anger"
    FEAR = "Fear"
    DEPRESSION = "Depression"
    CONTENTMENT = "Contentment"


DEFAULT_LABEL = Label.SABR

# Single English words the passage search API matches well.
SEARCH_TERMS: dict[Label, str] = {
    Label.SABR: "patience",
    Label.DUA: "supplication",
    Label.TAWAKKUL: "trust",
    Label.SHUKR: "gratitude",
    Label.TAWBAH: "repentance",
    Label.DHIKR: "remembrance",
    Label.IMAN: "faith",
    Label.IKHLAS: "intention",
    Label.LONELINESS: "alone",
    Label.ANXIETY: "worry",
    Label.GRIEF: "grief",
    Label.HOPE: "hope",
    Label.GRATITUDE: "gratitude",
    Label.PURPOSE: "deeds",
    Label.FORGIVENESS: "forgiveness",
    Label.LOVE: "love",
    Label.ANGER: "anger",
    Label.FEAR: "fear",
    Label.DEPRESSION: "sadness",
    Label.CONTENTMENT: "contentment",
}

_BY_LOWER: dict[str, Label] = {label.value.lower(): label for label in Label}


def clamp_label(raw: str | None) -> Label:
    """Return the label matching *raw* case-insensitively, else the default.

    The classifier is never trusted to stay inside the vocabulary; anything
    unrecognised degrades to :data:`DEFAULT_LABEL` instead of failing the run.
    """
    if not raw:
        return DEFAULT_LABEL
    return _BY_LOWER.get(raw.strip().lower(), DEFAULT_LABEL)


def search_term_for(label: Label | str) -> str:
    """Map a label to its search term, falling back to the lowercased label."""
    text = str(label).strip()
    try:
        return SEARCH_TERMS[Label(text)]
    except ValueError:
        return text.lower()
