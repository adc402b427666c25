"""Text rendering of the category page."""

from datetime import datetime
from typing import List
from models.category import CategoryRecord
from services.forms import FormController, ViewState

RULE = "=" * 80
SEPARATOR = "-" * 80


def format_date(timestamp: str) -> str:
    """Show a backend or client timestamp as YYYY-MM-DD, or raw if unparseable."""
    if not timestamp:
        return ""
    try:
        return datetime.fromisoformat(timestamp.strip()).date().isoformat()
    except ValueError:
        return timestamp


def render_card(record: CategoryRecord) -> List[str]:
    return [
        f"[{record.id}] {record.name}",
        f"  Created by: {record.created_by}",
        f"  Created on: {format_date(record.created_at)}",
        f"  Last updated: {format_date(record.updated_at)}",
    ]


def render_categories(records: List[CategoryRecord]) -> List[str]:
    """Render the card grid, one card per category in store order."""
    if not records:
        return ["No categories found."]

    lines = []
    for record in records:
        lines.extend(render_card(record))
        lines.append(SEPARATOR)
    lines.append(f"Total categories: {len(records)}")
    return lines


def render_page(forms: FormController) -> List[str]:
    """Render the whole page for its current view state."""
    if forms.view is ViewState.LOADING:
        return ["Loading..."]
    if forms.view is ViewState.ERROR:
        return [forms.load_error or ""]

    lines = [RULE, "Category Name", f"  > {forms.new_name}"]
    if forms.form_error:
        lines.append(f"  ! {forms.form_error}")

    if forms.editing:
        lines.append("Update Category Name")
        lines.append(f"  > {forms.edit_name}")
        if forms.edit_error:
            lines.append(f"  ! {forms.edit_error}")

    lines.append(RULE)
    lines.extend(render_categories(forms.categories))
    return lines
