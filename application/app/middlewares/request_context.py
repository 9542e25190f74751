"""
Request and order context for log enrichment, using contextvars
"""
from contextlib import contextmanager
from contextvars import ContextVar
import uuid


class RequestContext:
    def __init__(self):
        self.request_id: str | None = None
        self.order_id: str | None = None
        self.order_detail_id: int | None = None
        self.product_id: int | None = None


_request_context_var: ContextVar[RequestContext] = ContextVar("request_context")


def _current() -> RequestContext:
    ctx = _request_context_var.get(None)
    if ctx is None:
        ctx = RequestContext()
        _request_context_var.set(ctx)
    return ctx


class _RequestContextProxy:
    def __getattr__(self, name):
        return getattr(_current(), name)

    def __setattr__(self, name, value):
        # ensure we set on current context instance
        setattr(_current(), name, value)


request_context = _RequestContextProxy()


def clear_request_context():
    # Reset to a fresh context
    _request_context_var.set(RequestContext())


def create_request_id() -> str:
    rid = str(uuid.uuid4())
    request_context.request_id = rid
    return rid


@contextmanager
def order_context(order_id: str | None = None, order_detail_id: int | None = None, product_id: int | None = None):
    """Scope log context to one order (and optionally one line) for the duration of the block."""
    ctx = RequestContext()
    ctx.request_id = request_context.request_id
    ctx.order_id = order_id
    ctx.order_detail_id = order_detail_id
    ctx.product_id = product_id
    token = _request_context_var.set(ctx)
    try:
        yield ctx
    finally:
        _request_context_var.reset(token)
