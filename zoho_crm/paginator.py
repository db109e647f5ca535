from enum import Enum

import singer

from zoho_crm.exceptions import (
    Cancelled,
    NotYetFetchedError,
    PaginationExhausted,
    PaginationFailed,
)
from zoho_crm.parameters import MIN_INDEX, PAGE_MAX_SIZE
from zoho_crm.parser import parse_response
from zoho_crm.response import Response
from zoho_crm.transport import fire_request


LOGGER = singer.get_logger()


class PaginatorState(Enum):
    READY = "ready"
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class Paginator:
    """Fetches a record listing page by page and merges the pages in order.

    Zoho caps a call at ``PAGE_MAX_SIZE`` records and never reports a total, so
    the only end-of-data signal is a page shorter than the page size. A total
    that is an exact multiple of the page size therefore costs one extra, empty
    page.

    Pages are fetched strictly one after the other. A failed page moves the
    paginator to FAILED: the records gathered so far stay available through
    ``records`` but the error is raised to the caller.

    ``cancel_event`` is only checked before a page is requested. A page already
    in flight runs to completion, or until the client ``timeout`` cuts it off,
    and the cancellation takes effect on the next page.
    """

    def __init__(
        self,
        request,
        fire=fire_request,
        parse=parse_response,
        page_size=PAGE_MAX_SIZE,
        cancel_event=None,
    ):
        if not 0 < page_size <= PAGE_MAX_SIZE:
            raise ValueError(f"page_size must be between 1 and {PAGE_MAX_SIZE}, got {page_size}")
        self.request = request
        self.page_size = page_size
        self.cancel_event = cancel_event
        self.state = PaginatorState.READY
        self.error = None
        self.records = []
        self.pages_fetched = 0
        self._fire = fire
        self._parse = parse
        self._raw_pages = []
        self._next_index = int(request.parameters.get("fromIndex", MIN_INDEX))

    @property
    def has_more(self):
        return self.state is PaginatorState.READY

    def next_window(self):
        return self._next_index, self._next_index + self.page_size - 1

    def fetch_next_page(self):
        if self.state is PaginatorState.EXHAUSTED:
            raise PaginationExhausted()
        if self.state is PaginatorState.FAILED:
            raise PaginationFailed(self.error)

        from_index, to_index = self.next_window()
        page_request = self.request.with_parameters({"fromIndex": from_index, "toIndex": to_index})

        self.state = PaginatorState.FETCHING
        try:
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise Cancelled(f"pagination of {self.request.module} cancelled before index {from_index}")
            LOGGER.info(f"Paginating through {self.request.module}, fromIndex={from_index} toIndex={to_index}")
            raw_data = self._fire(page_request)
            content = self._parse(page_request, raw_data)
        except Exception as err:
            self.state = PaginatorState.FAILED
            self.error = err
            LOGGER.warning(
                f"pagination of {self.request.module}/{self.request.method} failed "
                f"after {self.pages_fetched} pages ({len(self.records)} records): {err}"
            )
            raise

        page = _page_records(content)
        self._raw_pages.append(raw_data)
        self.records.extend(page)
        self.pages_fetched += 1
        self._next_index = to_index + 1

        if len(page) < self.page_size:
            self.state = PaginatorState.EXHAUSTED
            LOGGER.info(f"{self.request.module} exhausted after {self.pages_fetched} pages, {len(self.records)} records")
        else:
            self.state = PaginatorState.READY
        return page

    def fetch_all(self):
        while self.has_more:
            self.fetch_next_page()
        if self.state is PaginatorState.FAILED:
            raise PaginationFailed(self.error)
        return self

    def get_aggregated_response(self):
        if self.pages_fetched == 0:
            raise NotYetFetchedError()
        return Response(self.request, list(self._raw_pages), list(self.records))

    def __iter__(self):
        position = 0
        while True:
            while position < len(self.records):
                yield self.records[position]
                position += 1
            if self.state is PaginatorState.FAILED:
                raise PaginationFailed(self.error)
            if not self.has_more:
                return
            self.fetch_next_page()

    def __repr__(self):
        return f"<Paginator {self.request.module}/{self.request.method} {self.state.value} pages={self.pages_fetched}>"


def _page_records(content):
    if not content:
        return []
    if isinstance(content, list):
        return content
    return [content]
