"""Helpers for form-body normalization, error reporting and messaging.
"""

import logging

from django.contrib import messages

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
} #: Mapping of message level names to ``logging`` levels.


def as_list(value):
    """Normalize a form value that may arrive as a scalar or as a sequence.

    A multi-select submits one value, several values or nothing at all
    depending on how many options were ticked. Callers pass the result of
    ``QueryDict.getlist`` or a raw value and always get a ``list`` back.

    Parameters
    ----------
    value
        ``None``, a single value, or a list/tuple of values.

    Returns
    -------
    list
        ``[]`` for ``None``, ``[value]`` for a scalar, otherwise a list copy.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_body(body, list_fields=()):
    """Copy a request body into a plain dict with fixed value shapes.

    Single-valued fields keep their last submitted value. Every field named
    in ``list_fields`` is turned into a list with :func:`as_list`, whether
    it was absent, submitted once or submitted several times.

    Parameters
    ----------
    body : django.http.QueryDict or dict
        The submitted form body (typically ``request.POST``).
    list_fields : Iterable[str]
        Names of the fields that must always be lists.

    Returns
    -------
    dict
        The normalized body, suitable for binding a form.
    """
    data = {key: body.get(key) for key in body}
    for name in list_fields:
        if hasattr(body, 'getlist'):
            value = body.getlist(name) or None
        else:
            value = body.get(name)
        data[name] = as_list(value)
    return data


def form_errors(form):
    """Flatten a bound form's errors into an ordered list.

    Errors are reported in the form's field declaration order, then in the
    order the validators raised them. Non-field errors come last.

    Parameters
    ----------
    form : django.forms.Form
        A bound form on which ``is_valid()`` has been called.

    Returns
    -------
    list[dict]
        One ``{"field": name, "message": text}`` dict per error.
    """
    errors = []
    for name in form.fields:
        for message in form.errors.get(name, []):
            errors.append({"field": name, "message": message})
    for message in form.non_field_errors():
        errors.append({"field": None, "message": message})
    return errors


def mark_checked(choices, selected_ids):
    """Flag each choice whose primary key is in ``selected_ids``.

    Sets ``choice.checked`` to ``True`` or ``False`` on every object so the
    form template can tick the matching checkboxes. Ids are compared as
    strings since they may come straight from the request body.

    Returns
    -------
    list
        The same ``choices`` list, for convenience.
    """
    selected = {str(pk) for pk in selected_ids}
    for choice in choices:
        choice.checked = str(choice.pk) in selected
    return choices


def notify(request=None, command=None, msg="", level="info"):
    """Report a message to the log and to the current user.

    The message is always written to the ``catalog`` log. When ``request``
    is provided it is also added to the request through Django's messages
    framework; when ``command`` is provided it is written to the
    management command's stdout using the styled helper.

    Parameters
    ----------
    request : Optional[django.http.HttpRequest]
        Optional request object; when provided the message is shown on the
        next rendered page.
    command : Optional[django.core.management.BaseCommand]
        Optional management command instance.
    msg : str
        The message text to display.
    level : str
        One of ``'info'``, ``'success'``, ``'warning'`` or ``'error'``.
    """
    logger.log(LOG_LEVELS.get(level, logging.INFO), msg)

    if request is not None:
        level_fn = getattr(messages, level, messages.info)
        level_fn(request, msg, fail_silently=True)
    elif command is not None:
        style_fn = getattr(command.style, level.upper(), command.style.SUCCESS)
        command.stdout.write(style_fn(msg))
