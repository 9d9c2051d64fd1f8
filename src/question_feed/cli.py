"""Command-line interface for the question feed."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .gateway import QuestionGateway
from .models import FeedStatus, FeedView, Question, SortKey
from .notifications import log_notification
from .page import FeedConfig, QuestionFeedPage
from .session import SessionStore


def build_parser() -> argparse.ArgumentParser:
    defaults = FeedConfig.from_env()
    parser = argparse.ArgumentParser(description="Community question feed")
    parser.add_argument("--backend-url", default=defaults.backend_url, help="Question service base URL")
    parser.add_argument("--session", default=str(defaults.session_path), help="Session file with token and user")
    parser.add_argument("--timeout", type=float, default=defaults.timeout, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show the question feed")
    list_parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.NEWEST.value,
        help="Display order",
    )
    list_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    delete_parser = subparsers.add_parser("delete", help="Delete a question and its answers (admin)")
    delete_parser.add_argument("question_id", help="Question ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    ban_parser = subparsers.add_parser("ban", help="Ban a user (admin)")
    ban_parser.add_argument("user_id", help="User ID")
    ban_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


def prompt_confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def build_page(args: argparse.Namespace, gateway: QuestionGateway) -> QuestionFeedPage:
    session = SessionStore(Path(args.session))
    confirm = (lambda _prompt: True) if getattr(args, "yes", False) else prompt_confirm
    return QuestionFeedPage(
        service=gateway,
        viewer=session.viewer,
        token=session.token,
        confirm=confirm,
        notify=log_notification,
        sort_key=SortKey(getattr(args, "sort", SortKey.NEWEST.value)),
    )


def list_questions(args: argparse.Namespace) -> int:
    gateway = QuestionGateway(base_url=args.backend_url, timeout=args.timeout)
    page = build_page(args, gateway)
    try:
        view = asyncio.run(page.mount())
    finally:
        gateway.close()

    if args.format == "json":
        print(json.dumps(_view_to_dict(view), indent=2))
    else:
        _print_view(view, show_ids=page.can_moderate)
    return 0 if view.status is FeedStatus.READY else 1


def delete(args: argparse.Namespace) -> int:
    gateway = QuestionGateway(base_url=args.backend_url, timeout=args.timeout)
    page = build_page(args, gateway)

    async def _run() -> str:
        view = await page.mount()
        question = _find(view, args.question_id)
        title = question.title if question else args.question_id
        return await page.moderation.request_delete(args.question_id, title)

    try:
        outcome = asyncio.run(_run())
    finally:
        gateway.close()
    return _exit_code(outcome)


def ban(args: argparse.Namespace) -> int:
    gateway = QuestionGateway(base_url=args.backend_url, timeout=args.timeout)
    page = build_page(args, gateway)

    async def _run() -> str:
        view = await page.mount()
        username = next(
            (q.author.username for q in view.questions if q.author.user_id == args.user_id),
            args.user_id,
        )
        return await page.moderation.request_ban(args.user_id, username)

    try:
        outcome = asyncio.run(_run())
    finally:
        gateway.close()
    return _exit_code(outcome)


def _exit_code(outcome: str) -> int:
    if outcome == "skipped":
        print("Moderation requires an admin session.", file=sys.stderr)
        return 1
    return 1 if outcome == "failed" else 0


def _find(view: FeedView, question_id: str) -> Question | None:
    return next((q for q in view.questions if q.id == question_id), None)


def _print_view(view: FeedView, show_ids: bool = False) -> None:
    if view.status is FeedStatus.ERRORED:
        print("Something went wrong")
        print(view.error_message or "")
        return
    if view.is_empty:
        print("No questions yet")
        print("Be the first to ask a question!")
        return

    print(f"All Questions ({view.sort_key.value})")
    for question in view.questions:
        accepted = " *" if question.has_accepted_answer else ""
        print()
        print(f"[{question.vote_count:>4} votes | {question.answer_count} answers{accepted}] {question.title}")
        summary = question.plain_description.strip().replace("\n", " ")
        if summary:
            print(f"    {summary[:160]}")
        if question.tags:
            print(f"    tags: {', '.join(question.tags)}")
        print(f"    by {question.author.username} on {question.created_at.date().isoformat()}")
        if show_ids:
            print(f"    id: {question.id}  author id: {question.author.user_id}")


def _view_to_dict(view: FeedView) -> dict:
    return {
        "status": view.status.value,
        "sort": view.sort_key.value,
        "error": view.error_message,
        "questions": [
            {
                "id": q.id,
                "title": q.title,
                "author": {"id": q.author.user_id, "username": q.author.username},
                "tags": list(q.tags),
                "votes": q.vote_count,
                "answers": q.answer_count,
                "accepted_answer_id": q.accepted_answer_id,
                "created_at": q.created_at.isoformat(),
            }
            for q in view.questions
        ],
    }


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "list":
        code = list_questions(args)
    elif args.command == "delete":
        code = delete(args)
    elif args.command == "ban":
        code = ban(args)
    else:
        parser.error(f"Unknown command {args.command}")
    sys.exit(code)


if __name__ == "__main__":
    main()
