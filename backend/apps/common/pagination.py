from typing import Mapping, Optional

from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    page_size = 10
    # Clients override the page size with `?limit=`
    page_size_query_param = 'limit'
    max_page_size = 100


def resolve_ordering(
    sort_by: Optional[str],
    sort_order: Optional[str],
    allowed: Mapping[str, str],
    default: str,
) -> str:
    """
    Translate ``sortBy``/``sortOrder`` query values into an ORM ordering.

    ``allowed`` maps public field names to model fields; unknown names fall
    back to ``default``. Any order other than ``desc`` sorts ascending.
    """
    field = allowed.get((sort_by or '').strip(), default)
    if (sort_order or '').strip().lower() == 'desc':
        return f'-{field}'
    return field
