"""
Command-line client for the catalog API. Examples:
  python -m catalog.client register "Ann" a@x.com secret1
  python -m catalog.client login a@x.com secret1
  python -m catalog.client books list --search dune
  python -m catalog.client books add "Dune" --author "Frank Herbert"
  python -m catalog.client users set-role USER_ID admin
  python -m catalog.client logout

CATALOG_API_URL selects the server (default http://localhost:5000);
CATALOG_TOKEN_FILE where the session token is kept (default ~/.catalog/token).
"""

import argparse
import os
import sys
from pathlib import Path

from catalog.client.api import DEFAULT_BASE_URL, CatalogApi
from catalog.client.session import SessionStore, TokenStorage
from catalog.client.views import render

DEFAULT_TOKEN_FILE = Path.home() / ".catalog" / "token"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-client", description="Library catalog client.")
    parser.add_argument("--url", default=os.environ.get("CATALOG_API_URL", DEFAULT_BASE_URL))
    parser.add_argument(
        "--token-file",
        default=os.environ.get("CATALOG_TOKEN_FILE", str(DEFAULT_TOKEN_FILE)),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="Create an account and sign in")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("password")

    p = sub.add_parser("login", help="Sign in")
    p.add_argument("email")
    p.add_argument("password")

    sub.add_parser("logout", help="Forget the stored token")
    sub.add_parser("whoami", help="Show the current session")

    books = sub.add_parser("books", help="Browse or manage books").add_subparsers(
        dest="books_command", required=True
    )
    p = books.add_parser("list")
    p.add_argument("--search", default="")
    p = books.add_parser("add")
    p.add_argument("title")
    p.add_argument("--author", default="")
    p.add_argument("--description", default="")
    p = books.add_parser("update")
    p.add_argument("book_id")
    p.add_argument("--title")
    p.add_argument("--author")
    p.add_argument("--description")
    p = books.add_parser("delete")
    p.add_argument("book_id")

    users = sub.add_parser("users", help="Manage accounts (admin)").add_subparsers(
        dest="users_command", required=True
    )
    p = users.add_parser("set-role")
    p.add_argument("user_id")
    p.add_argument("role", choices=["user", "admin"])
    return parser


def run(args: argparse.Namespace, store: SessionStore) -> bool:
    if args.command == "register":
        return store.register(args.name, args.email, args.password) and store.fetch_books()
    if args.command == "login":
        return store.login(args.email, args.password) and store.fetch_books()
    if args.command == "logout":
        store.logout()
        return True

    store.restore()
    if args.command == "whoami":
        return store.state.is_authenticated
    if args.command == "users":
        return store.set_role(args.user_id, args.role)
    if args.books_command == "list":
        store.set_search(args.search)
        return store.fetch_books()
    if args.books_command == "add":
        return store.submit_book(args.title, args.author, args.description)
    if args.books_command == "update":
        return store.update_book(
            args.book_id,
            title=args.title,
            author=args.author,
            description=args.description,
        )
    return store.delete_book(args.book_id)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    with CatalogApi(args.url) as api:
        store = SessionStore(api, TokenStorage(args.token_file))
        ok = run(args, store)
        print(render(store.state))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
