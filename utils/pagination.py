import math

from models.view import PaginationView

def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if total_count > 0 else 0

def has_previous(page: int) -> bool:
    return page > 1

def has_next(page: int, page_size: int, total_count: int) -> bool:
    return page * page_size < total_count

def build_pagination(page: int, page_size: int, total_count: int) -> PaginationView:
    """
    Pagination controls for the current page. An empty result still reads
    "Page 1 of 1" so the label never shows zero pages.
    """
    pages = total_pages(total_count, page_size)
    return PaginationView(
        page=page,
        total_pages=pages,
        total_count=total_count,
        page_info=f"Page {page} of {max(pages, 1)}",
        previous_disabled=not has_previous(page),
        next_disabled=not has_next(page, page_size, total_count),
    )
