"""Plain-text rendering of a SessionState. Output depends only on the state passed in."""

from catalog.client.session import SessionState

RULE = "-" * 40


def _book_lines(state: SessionState, show_ids: bool) -> list[str]:
    books = state.visible_books
    if not books:
        return ["No books found." if state.search else "No books in the catalog yet."]
    lines = []
    for book in books:
        prefix = f"[{book['id']}] " if show_ids else ""
        lines.append(f"{prefix}{book['title']} by {book.get('author') or 'Unknown'}")
        if book.get("description"):
            lines.append(f"    {book['description']}")
    return lines


def render(state: SessionState) -> str:
    lines = ["Digital Library", RULE]
    if state.error:
        lines.append(f"! {state.error}")

    view = state.view
    if view == "login":
        lines += [
            "Sign in to your account",
            "  login EMAIL PASSWORD",
            "Don't have an account? register NAME EMAIL PASSWORD",
        ]
    elif view == "register":
        lines += [
            "Create your account (password: minimum 6 characters)",
            "  register NAME EMAIL PASSWORD",
            "Already have an account? login EMAIL PASSWORD",
        ]
    else:
        user = state.user
        title = "Admin Dashboard" if view == "admin_dashboard" else "Library"
        lines.append(f"{title} - signed in as {user['name']} <{user['email']}> ({user['role']})")
        if state.search:
            lines.append(f"Search: {state.search}")
        lines.append(RULE)
        lines += _book_lines(state, show_ids=view == "admin_dashboard")
        if view == "admin_dashboard":
            lines += [RULE, "Actions: books add TITLE | books update ID | books delete ID"]
    return "\n".join(lines)
