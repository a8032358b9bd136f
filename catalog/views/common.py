"""Routing and response helpers shared by the catalog controllers."""

from django.http import Http404, HttpResponse, HttpResponseNotAllowed


def route(get=None, post=None):
    """Combine a GET handler and a POST handler into one async view.

    Any other method, or a method with no handler, is answered with
    ``405 Method Not Allowed``.

    Parameters
    ----------
    get : Optional[Callable]
        Coroutine function handling GET (and HEAD) requests.
    post : Optional[Callable]
        Coroutine function handling POST requests.

    Returns
    -------
    Callable
        An ``async`` Django view.
    """
    handlers = {'GET': get, 'HEAD': get, 'POST': post}
    allowed = [method for method, handler in handlers.items() if handler is not None]

    async def view(request, *args, **kwargs):
        handler = handlers.get(request.method)
        if handler is None:
            return HttpResponseNotAllowed(allowed)
        return await handler(request, *args, **kwargs)

    return view


def ensure_found(record, message):
    """Return ``record``, raising :class:`~django.http.Http404` when it is ``None``."""
    if record is None:
        raise Http404(message)
    return record


def not_implemented(label):
    """Return the plain-text placeholder served by handlers that are not built yet."""
    return HttpResponse(f"NOT IMPLEMENTED: {label}", content_type="text/plain; charset=utf-8")
