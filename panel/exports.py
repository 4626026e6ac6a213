"""Spreadsheet exports for the admin panel."""
import openpyxl
from django.http import HttpResponse
from django.utils import timezone

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _naive(value):
    # openpyxl refuses timezone-aware datetimes
    return timezone.localtime(value).replace(tzinfo=None) if value else None


def xlsx_response(filename, title, headers, rows):
    response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    ws.append(headers)
    for row in rows:
        ws.append(row)

    wb.save(response)
    return response


def export_events(events):
    rows = (
        [e.title, _naive(e.date), e.location, e.capacity, "Yes" if e.is_recurring else "No"]
        for e in events
    )
    return xlsx_response("events.xlsx", "Events", ['Title', 'Date', 'Location', 'Capacity', 'Recurring'], rows)


def export_attendees(event, registrations):
    rows = (
        [r.user.display_name, r.user.email, r.user.college, r.status, r.payment_status, _naive(r.registered_at)]
        for r in registrations
    )
    headers = ['Name', 'Email', 'College', 'Status', 'Payment', 'Registered At']
    return xlsx_response(f"attendees-{event.pk}.xlsx", "Attendees", headers, rows)


def export_workshop_registrations(workshop, registrations):
    rows = (
        [r.name, r.email, r.phone, r.organization, r.year, r.payment_status,
         "Yes" if r.attended else "No", _naive(r.registered_at)]
        for r in registrations
    )
    headers = ['Name', 'Email', 'Phone', 'Organization', 'Year / Role', 'Payment', 'Attended', 'Registered At']
    return xlsx_response(f"workshop-{workshop.pk}-registrations.xlsx", "Registrations", headers, rows)
