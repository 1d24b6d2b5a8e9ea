"""Per-item visibility rule."""

from booktoc.core.models import PUBLISHED_STATUSES, ContentItem


def is_visible(item: ContentItem, has_elevated_access: bool) -> bool:
    """Check whether a caller may see an item.

    Callers with elevated access see everything; everyone else only sees
    published items (``publish`` or ``published``).
    """
    if has_elevated_access:
        return True
    return item.status in PUBLISHED_STATUSES
