# apps/clients/templatetags/client_tags.py
import logging
from urllib.parse import urlencode

from django import template
from django.urls import reverse
from django.utils.html import format_html, format_html_join

logger = logging.getLogger(__name__)

register = template.Library()


def page_url(page_number, filter_text='', sort_order=''):
    """Index URL for a page, keeping the current filter and sort"""
    params = {'page': page_number}
    if filter_text:
        params['filterText'] = filter_text
    if sort_order:
        params['sortOrder'] = str(sort_order)
    return f"{reverse('clients:index')}?{urlencode(params)}"


def _page_item(page, page_number, filter_text, sort_order):
    if page_number == page.page_number:
        return format_html(
            '<li class="page-item active"><a class="page-link">{}</a></li>',
            page_number,
        )
    return format_html(
        '<li class="page-item"><a class="page-link" href="{}">{}</a></li>',
        page_url(page_number, filter_text, sort_order),
        page_number,
    )


@register.simple_tag
def page_links(page, filter_text='', sort_order=''):
    """
    Previous / current / next links for the client list.

    Usage:
        {% page_links page filter.selected_text sort.current %}
    """
    if page is None:
        logger.error("page_links used without page metadata")
        raise ValueError("page metadata is not set")

    numbers = []
    if page.has_previous:
        numbers.append(page.previous_page_number)
    numbers.append(page.page_number)
    if page.has_next:
        numbers.append(page.next_page_number)

    items = format_html_join(
        '', '{}',
        ((_page_item(page, number, filter_text, sort_order),) for number in numbers),
    )
    return format_html('<div><ul class="pagination">{}</ul></div>', items)


@register.simple_tag
def sort_url(sort_order, filter_text=''):
    """Index URL that applies a sort order from the first page"""
    params = {'sortOrder': str(sort_order)}
    if filter_text:
        params['filterText'] = filter_text
    return f"{reverse('clients:index')}?{urlencode(params)}"


@register.filter
def field_errors(errors, field):
    """Messages of one field out of a FieldError list"""
    return [error.message for error in errors or [] if error.field == field]
