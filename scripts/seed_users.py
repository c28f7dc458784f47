"""Utility script to register users and follow edges for local development."""

from __future__ import annotations

import argparse

from runner_social.domain.entities import User
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import Failure
from runner_social.infrastructure.database import SessionLocal, initialize_database
from runner_social.infrastructure.repositories import UserRepository


def _parse_user(value: str) -> tuple[str, str, str, str]:
    parts = value.split(":")
    if len(parts) != 4 or not all(parts):
        raise argparse.ArgumentTypeError(
            f"expected username:first_name:last_name:email, got {value!r}"
        )
    return parts[0], parts[1], parts[2], parts[3]


def _parse_follow(value: str) -> tuple[str, str]:
    follower, _, followed = value.partition(":")
    if not follower or not followed:
        raise argparse.ArgumentTypeError(f"expected follower:followed, got {value!r}")
    return follower, followed


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed run."""

    parser = argparse.ArgumentParser(
        description="Register users and follow edges in the Runner Social database.",
    )
    parser.add_argument(
        "--user",
        dest="users",
        action="append",
        type=_parse_user,
        default=[],
        metavar="USERNAME:FIRST:LAST:EMAIL",
        help="User to register; may be repeated. Existing usernames are skipped.",
    )
    parser.add_argument(
        "--follow",
        dest="follows",
        action="append",
        type=_parse_follow,
        default=[],
        metavar="FOLLOWER:FOLLOWED",
        help="Make FOLLOWER follow FOLLOWED (usernames); may be repeated.",
    )
    parser.add_argument(
        "--delete",
        dest="deleted",
        action="append",
        default=[],
        metavar="USERNAME",
        help="Soft delete USERNAME; may be repeated.",
    )
    return parser.parse_args()


def main() -> None:
    """Apply the requested users, follow edges and deletions."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        repository = UserRepository(session)
        for username, first_name, last_name, email in args.users:
            existing = repository.get_by_username(username, include_deleted=True)
            if isinstance(existing, Failure):
                raise SystemExit(f"Could not look up {username}: {existing.reason}")
            if existing.value is not None:
                print(f"Skipping existing user {username} ({existing.value.id})")
                continue
            created = repository.create(
                User(
                    id=new_object_id(),
                    username=username,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                )
            )
            if isinstance(created, Failure):
                raise SystemExit(f"Could not create {username}: {created.reason}")
            print(f"Created user {username} ({created.value.id})")

        for follower_name, followed_name in args.follows:
            follower = repository.get_by_username(follower_name)
            followed = repository.get_by_username(followed_name)
            if isinstance(follower, Failure) or isinstance(followed, Failure):
                raise SystemExit("Could not look up follow edge users")
            if follower.value is None or followed.value is None:
                raise SystemExit(f"Unknown user in follow edge {follower_name}:{followed_name}")
            edge = repository.follow(follower.value.id, followed.value.id)
            if isinstance(edge, Failure) or not edge.value:
                raise SystemExit(f"Could not add follow edge {follower_name}:{followed_name}")
            print(f"{follower_name} now follows {followed_name}")

        for username in args.deleted:
            result = repository.mark_deleted(username)
            if isinstance(result, Failure) or result.value is None:
                raise SystemExit(f"Could not delete {username}")
            print(f"Soft deleted {username}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
