import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MENTION_PATTERN = re.compile(r"@(\w+)")


def slugify(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def extract_mentions(notes: str | None) -> list[str]:
    """Return the @name tokens in a note, in order of appearance."""
    if not notes:
        return []
    return MENTION_PATTERN.findall(notes)
