"""
URL slug derivation for store product handles.

slugify("Ajani's Pridemate") -> "ajanis-pridemate"
"""

import re
from enum import Enum

FACE_SEPARATOR = "//"

_APOSTROPHES = re.compile(r"['’]")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


class FacePolicy(str, Enum):
    """How a multi-faced card name ("Front // Back") becomes a slug."""

    FIRST_FACE = "first_face"
    ALL_FACES = "all_faces"


def slugify(text: str) -> str:
    """
    Convert text to a lowercase hyphenated slug.

    Apostrophes are dropped, runs of anything else that is not a-z/0-9
    collapse to one hyphen, and leading/trailing hyphens are trimmed.
    Idempotent: slugify(slugify(x)) == slugify(x).
    """
    text = _APOSTROPHES.sub("", text.lower())
    return _NON_ALPHANUMERIC.sub("-", text).strip("-")


def slugify_card_name(name: str, policy: FacePolicy = FacePolicy.ALL_FACES) -> str:
    """
    Slugify a card name, handling multi-faced names per policy.

    Examples:
        >>> slugify_card_name("Fire // Ice")
        'fire-ice'
        >>> slugify_card_name("Fire // Ice", FacePolicy.FIRST_FACE)
        'fire'
    """
    if FACE_SEPARATOR not in name:
        return slugify(name)

    faces = [slugify(face) for face in name.split(FACE_SEPARATOR)]
    faces = [face for face in faces if face]

    if policy is FacePolicy.FIRST_FACE:
        return faces[0] if faces else ""

    return "-".join(faces)
