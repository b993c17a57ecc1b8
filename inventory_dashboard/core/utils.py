"""Helpers shared by the dashboard views"""
from django.utils.http import url_has_allowed_host_and_scheme

EMPTY_COUNT = {'total': 0, 'total_quantity': 0}


def find_office_count(counts, office):
    """Count row for an office; offices the API left out count as zero"""
    for row in counts or []:
        if row.get('office') == office:
            return {
                'total': row.get('total') or 0,
                'total_quantity': row.get('total_quantity') or 0,
            }
    return dict(EMPTY_COUNT)


def office_totals(offices, computer_counts, peripheral_counts, printer_item_counts):
    """
    Per-office breakdown shown on the home dashboard.

    Each row has the three category counts plus combined item and quantity
    totals for the office.
    """
    rows = []
    for office in offices:
        computers = find_office_count(computer_counts, office)
        peripherals = find_office_count(peripheral_counts, office)
        printer_items = find_office_count(printer_item_counts, office)
        rows.append({
            'office': office,
            'computers': computers,
            'peripherals': peripherals,
            'printer_items': printer_items,
            'total_items': computers['total'] + peripherals['total'] + printer_items['total'],
            'total_quantity': (
                computers['total_quantity']
                + peripherals['total_quantity']
                + printer_items['total_quantity']
            ),
        })
    return rows


def positive_int(value):
    """Parse a positive integer query parameter; anything else is None"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def safe_next_url(request, fallback='/'):
    """Redirect target from ?next= / POST next, limited to this host"""
    next_url = request.POST.get('next') or request.GET.get('next') or request.META.get('HTTP_REFERER')
    if next_url and url_has_allowed_host_and_scheme(
        next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return next_url
    return fallback
