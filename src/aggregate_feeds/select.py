"""Item selection: dedup, recency cap, category-fair round-robin and ordering."""

from typing import Iterable

from ingest_topics.models import FeedItem


def deduplicate(items: Iterable[FeedItem]) -> list[FeedItem]:
    """Keep the first item seen for each guid, preserving order."""
    seen: set[str] = set()
    out: list[FeedItem] = []
    for item in items:
        if item.guid in seen:
            continue
        seen.add(item.guid)
        out.append(item)
    return out


def sort_newest_first(items: Iterable[FeedItem]) -> list[FeedItem]:
    """Stable sort by pub_date, newest first."""
    return sorted(items, key=lambda item: item.pub_date, reverse=True)


def cap_most_recent(items: Iterable[FeedItem], limit: int) -> list[FeedItem]:
    """The limit most recent items."""
    return sort_newest_first(items)[:limit]


def balance_by_category(items: Iterable[FeedItem], limit: int) -> list[FeedItem]:
    """Round-robin across source categories so no single topic dominates.

    Groups keep the order in which their category first appears and are each
    ordered newest first. Round r takes the r-th item of every group that has
    one; selection stops at limit items or after a round that adds nothing.
    """
    groups: dict[str, list[FeedItem]] = {}
    for item in items:
        groups.setdefault(item.source_category, []).append(item)
    ordered_groups = [sort_newest_first(group) for group in groups.values()]

    selected: list[FeedItem] = []
    index = 0
    while len(selected) < limit:
        added_any = False
        for group in ordered_groups:
            if index < len(group):
                selected.append(group[index])
                added_any = True
                if len(selected) == limit:
                    break
        if not added_any:
            break
        index += 1

    return selected


def filter_by_category(items: Iterable[FeedItem], category: str) -> list[FeedItem]:
    """Items rendered in the given output category."""
    return [item for item in items if category in item.mapped_categories]
