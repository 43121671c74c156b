"""Page-number pagination shared by every paginated operation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, Callable, ClassVar, Iterator, Mapping

from pydantic import Field

from .models import SonarQubeModel
from .options import OptionModel
from .rules import Range

if TYPE_CHECKING:
    from .request_options import RequestOptions

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 500


class PaginationArgs(OptionModel):
    """Mixin for options of paginated operations.

    ``page`` is 1-based and travels as ``p``; ``page_size`` travels as ``ps``.
    Subclasses that accept a different ceiling override ``max_page_size`` and
    redeclare ``page_size`` with the matching :class:`Range`.
    """

    max_page_size: ClassVar[int] = MAX_PAGE_SIZE

    page: Annotated[int | None, Range(minimum=1), Field(alias="p")] = None
    page_size: Annotated[
        int | None, Range(minimum=MIN_PAGE_SIZE, maximum=MAX_PAGE_SIZE), Field(alias="ps")
    ] = None


class Paging(SonarQubeModel):
    page_index: int = 1
    page_size: int = 0
    total: int = 0


def _paging_of(page: Any) -> Paging | None:
    paging = getattr(page, "paging", None)
    if isinstance(paging, Paging):
        return paging
    return None


def iter_pages(
    method: Callable[..., Any],
    options: OptionModel | Mapping[str, Any] | None = None,
    *,
    request_options: "RequestOptions | None" = None,
) -> Iterator[Any]:
    """Call a paginated operation page by page until the server total is reached.

    ``method`` is a bound service method such as ``client.projects.search``.
    Each decoded page is yielded as it arrives. ``page_size`` defaults to the
    largest size the operation accepts.
    """
    operation = getattr(method, "operation", None)
    model_cls = operation.options if operation is not None else None
    if model_cls is None or not issubclass(model_cls, PaginationArgs):
        raise TypeError(f"{getattr(method, '__qualname__', method)!r} is not a paginated operation")

    if isinstance(options, OptionModel):
        base = options.model_dump(exclude_none=True)
    else:
        base = dict(options or {})
    page_size = base.pop("page_size", None) or base.pop("ps", None) or model_cls.max_page_size
    page_number = base.pop("page", None) or base.pop("p", None) or 1

    while True:
        logger.debug(f"Fetching page {page_number} (size {page_size}) via {operation.path}")
        page = method({**base, "page": page_number, "page_size": page_size}, request_options=request_options)
        yield page

        paging = _paging_of(page)
        if paging is None or paging.page_size <= 0:
            return
        if paging.page_index * paging.page_size >= paging.total:
            return
        page_number = paging.page_index + 1
