import argparse
from datetime import datetime, timedelta, timezone

from app.core.config import Settings
from app.infrastructure.persistence.sqlite import SQLitePersistence


def main() -> None:
    settings = Settings()

    parser = argparse.ArgumentParser(description="Delete verification tokens older than a number of hours.")
    parser.add_argument(
        "--hours",
        type=int,
        default=settings.verification_token_ttl_hours,
        help="Age in hours after which tokens are deleted (defaults to VERIFICATION_TOKEN_TTL_HOURS).",
    )
    args = parser.parse_args()

    if args.hours <= 0:
        raise SystemExit("Token expiry is disabled. Pass --hours or set VERIFICATION_TOKEN_TTL_HOURS.")

    cutoff = (datetime.now(timezone.utc) - timedelta(hours=args.hours)).replace(microsecond=0).isoformat()
    persistence = SQLitePersistence(settings.database_path)
    try:
        purged = persistence.purge_tokens_older_than(cutoff)
    finally:
        persistence.close()
    print(f"Purged {purged} verification tokens issued before {cutoff}.")


if __name__ == "__main__":
    main()
