"""
Helpers for the admin list pages: search filtering, date display and the
newsletter CSV export.
"""

import csv
import io
from datetime import date, datetime


def _matches(value, term):
    return term in (value or '').lower()


def filter_contacts(contacts, term):
    """Case-insensitive search over name, email and city; raw match on the phone number"""
    if not term or not term.strip():
        return list(contacts)

    term = term.lower()
    return [
        contact for contact in contacts
        if _matches(contact.get('fullName'), term)
        or _matches(contact.get('email'), term)
        or term in (contact.get('mobileNumber') or '')
        or _matches(contact.get('city'), term)
    ]


def filter_subscriptions(subscriptions, term):
    if not term or not term.strip():
        return list(subscriptions)

    term = term.lower()
    return [sub for sub in subscriptions if _matches(sub.get('email'), term)]


def parse_timestamp(value):
    """Parse the server's timestamps: ISO 8601 or SQLite's 'YYYY-MM-DD HH:MM:SS'"""
    if isinstance(value, datetime):
        return value
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def format_date(value):
    """e.g. 'Jan 5, 2025, 09:30 AM'"""
    if not value:
        return ''
    try:
        moment = parse_timestamp(value)
    except (TypeError, ValueError):
        return str(value)
    return f"{moment:%b} {moment.day}, {moment:%Y}, {moment:%I:%M %p}"


def subscriptions_to_csv(subscriptions):
    """Email, Subscribed At, Status - every cell double-quoted"""
    buf = io.StringIO()
    buf.write('Email,Subscribed At,Status')

    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='')
    for sub in subscriptions:
        buf.write('\n')
        writer.writerow([
            sub.get('email', ''),
            format_date(sub.get('subscribedAt')),
            'Active' if sub.get('isActive') else 'Inactive',
        ])
    return buf.getvalue()


def export_filename(today=None):
    today = today or date.today()
    return f"newsletter-subscriptions-{today.isoformat()}.csv"
