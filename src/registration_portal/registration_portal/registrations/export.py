from __future__ import annotations

import csv
import io
from typing import Iterable

from .model import Registration

EXPORT_FIELDS = [
    "S.No",
    "Name",
    "Age Group",
    "Father's/Husband's Name",
    "House/Family Name",
    "Email",
    "Mobile Number",
    "WhatsApp Number",
    "Residing Emirate",
    "Location (if other)",
    "Place of Residence",
    "Adults Count",
    "Children Count",
    "Total Attendees",
    "Check-in Status",
    "Checked In Adults",
    "Checked In Children",
    "Total Checked In",
    "Registration Date",
]


def export_row(index: int, r: Registration) -> dict:
    return {
        "S.No": index,
        "Name": r.name,
        "Age Group": r.age_group.value,
        "Father's/Husband's Name": r.father_husband_name,
        "House/Family Name": r.house_name,
        "Email": r.email or "",
        "Mobile Number": f"{r.mobile_country_code}{r.mobile_number}",
        "WhatsApp Number": f"{r.whatsapp_country_code or ''}{r.whatsapp_number}" if r.whatsapp_number else "",
        "Residing Emirate": r.residing_emirate.value,
        "Location (if other)": r.location_if_other or "",
        "Place of Residence": r.place_of_residence.value,
        "Adults Count": r.adults_count,
        "Children Count": r.children_count,
        "Total Attendees": r.total_attendees,
        "Check-in Status": "Checked In" if r.is_checked_in else "Not Checked In",
        "Checked In Adults": r.checked_in_adults,
        "Checked In Children": r.checked_in_children,
        "Total Checked In": r.total_checked_in,
        "Registration Date": r.created_at.strftime("%Y-%m-%d") if r.created_at else "",
    }


def registrations_to_csv(registrations: Iterable[Registration]) -> bytes:
    """Render registrations as CSV bytes (UTF-8 with BOM so Excel detects the encoding)."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
    writer.writeheader()
    for i, r in enumerate(registrations, start=1):
        writer.writerow(export_row(i, r))
    return out.getvalue().encode("utf-8-sig")


def export_filename(event_slug: str, stamp: str) -> str:
    return f"{event_slug}-registrations-{stamp}.csv"
