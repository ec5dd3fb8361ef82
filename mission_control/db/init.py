"""Initialize database tables and bootstrap administrators."""
import argparse
import sys

from sqlmodel import Session, SQLModel, select

from mission_control.db.config import engine
from mission_control.models import Task, TaskNote, TaxonomyCategory, TaxonomyItem, TaxonomyType, User  # noqa: F401
from mission_control.utils.clock import utc_now
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.db")


def init_db():
    """Create all tables in the database."""
    logger.info("Creating all tables")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")


def promote_admin(email: str) -> bool:
    """
    Grant the admin role to the account registered with ``email``.

    The HTTP API only lets an existing admin change roles, so the first
    administrator has to be promoted out of band.

    Returns:
        True if the account exists, False otherwise
    """
    with Session(engine) as session:
        user = session.exec(select(User).where(User.email == email.strip().lower())).first()
        if not user:
            return False
        user.role = "admin"
        user.updated_at = utc_now()
        session.add(user)
        session.commit()
    logger.info("User promoted to admin", email=email)
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="python -m mission_control.db.init")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("create", help="create all tables")
    promote = commands.add_parser("promote", help="grant the admin role to a user")
    promote.add_argument("email")
    args = parser.parse_args(argv)

    init_db()
    if args.command == "promote":
        if not promote_admin(args.email):
            print(f"No user registered with email {args.email}", file=sys.stderr)
            return 1
        print(f"{args.email} is now an admin")
    return 0


if __name__ == "__main__":
    sys.exit(main())
