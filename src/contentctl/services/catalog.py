"""ContentCatalog — named views over the cached collections for page code.

Page components call these instead of assembling filters themselves.  All
views read through the repository cache and return records (or tuples of
records) in their collection's fixed order.  Nothing here raises for an
unknown slug, category, or tag: the result is simply empty or ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from contentctl.config.models import QueryConfig
from contentctl.domain.types import ContentType
from contentctl.services.query import ContentFilter, filter_records, paginate, search_records

if TYPE_CHECKING:
    from contentctl.domain.records import PostRecord, ServiceRecord, TestimonialRecord
    from contentctl.infrastructure.repository import ContentRepository


class ContentCatalog:
    """Read-only catalog of posts, services, and testimonials."""

    def __init__(self, repository: ContentRepository, *, config: QueryConfig | None = None) -> None:
        self._repo = repository
        self._config = config or QueryConfig()

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def get_all_posts(self) -> tuple[PostRecord, ...]:
        return self._repo.get(ContentType.POST)  # type: ignore[return-value]

    def get_post_by_slug(self, slug: str) -> PostRecord | None:
        return next((p for p in self.get_all_posts() if p.slug == slug), None)

    def get_featured_posts(self, limit: int = 0) -> tuple[PostRecord, ...]:
        featured = filter_records(self.get_all_posts(), ContentFilter(featured=True))
        return paginate(featured, 0, limit)

    def get_recent_posts(self, limit: int | None = None) -> tuple[PostRecord, ...]:
        if limit is None:
            limit = self._config.recent_limit
        return paginate(self.get_all_posts(), 0, limit)

    def get_posts_by_category(self, category: str) -> tuple[PostRecord, ...]:
        return filter_records(self.get_all_posts(), ContentFilter(category=category))

    def get_posts_by_tag(self, tag: str) -> tuple[PostRecord, ...]:
        return filter_records(self.get_all_posts(), ContentFilter(tag=tag))

    def get_related_posts(self, slug: str, limit: int | None = None) -> tuple[PostRecord, ...]:
        """Other posts sharing a category or tag with *slug*.

        Ranked by how many categories and tags they share, then by the
        collection's date order.
        """
        if limit is None:
            limit = self._config.related_limit
        posts = self.get_all_posts()
        current = next((p for p in posts if p.slug == slug), None)
        if current is None:
            return ()
        wanted = {c.casefold() for c in current.categories} | {
            f"#{t.casefold()}" for t in current.tags
        }
        scored: list[tuple[int, int, PostRecord]] = []
        for position, post in enumerate(posts):
            if post.slug == slug:
                continue
            keys = {c.casefold() for c in post.categories} | {f"#{t.casefold()}" for t in post.tags}
            shared = len(wanted & keys)
            if shared:
                scored.append((-shared, position, post))
        scored.sort(key=lambda item: (item[0], item[1]))
        return paginate([post for _, _, post in scored], 0, limit)

    def get_all_categories(self) -> list[str]:
        return sorted({c for p in self.get_all_posts() for c in p.categories})

    def get_all_tags(self) -> list[str]:
        return sorted({t for p in self.get_all_posts() for t in p.tags})

    def search_posts(self, query: str) -> tuple[PostRecord, ...]:
        return search_records(self.get_all_posts(), query)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def get_all_services(self) -> tuple[ServiceRecord, ...]:
        return self._repo.get(ContentType.SERVICE)  # type: ignore[return-value]

    def get_service_by_slug(self, slug: str) -> ServiceRecord | None:
        return next((s for s in self.get_all_services() if s.slug == slug), None)

    def get_featured_services(self) -> tuple[ServiceRecord, ...]:
        """Services whose front matter sets ``featured: true``."""
        return filter_records(self.get_all_services(), ContentFilter(featured=True))

    # ------------------------------------------------------------------
    # Testimonials
    # ------------------------------------------------------------------

    def get_all_testimonials(self) -> tuple[TestimonialRecord, ...]:
        return self._repo.get(ContentType.TESTIMONIAL)  # type: ignore[return-value]

    def get_featured_testimonials(self) -> tuple[TestimonialRecord, ...]:
        return filter_records(self.get_all_testimonials(), ContentFilter(featured=True))

    def get_high_rated_testimonials(
        self, min_rating: int | None = None
    ) -> tuple[TestimonialRecord, ...]:
        if min_rating is None:
            min_rating = self._config.high_rating_threshold
        return filter_records(
            self.get_all_testimonials(), ContentFilter(min_rating=min_rating)
        )

    def get_testimonials_for_service(self, service_slug: str) -> tuple[TestimonialRecord, ...]:
        return filter_records(
            self.get_all_testimonials(), ContentFilter(service=service_slug)
        )
