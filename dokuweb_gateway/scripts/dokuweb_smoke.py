"""
Doku@WEB Smoke Script

Runs the client against the configured Doku@WEB instance (.env):
- Authenticate
- List keywords
- Search tickets created by a login
- Optionally fetch one ticket and create a test ticket

Usage:
    python -m dokuweb_gateway.scripts.dokuweb_smoke --creator myLogin
    python -m dokuweb_gateway.scripts.dokuweb_smoke --ticket-id 55
    python -m dokuweb_gateway.scripts.dokuweb_smoke --create --partner 1000.4711.00123.01 --keyword Mieterhöhung
"""
import argparse
import asyncio
import sys

from dokuweb_gateway.exceptions import DokuwebError
from dokuweb_gateway.services.dokuweb import DokuwebClient
from dokuweb_gateway.utils.logger import get_logger

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Doku@WEB client smoke test")
    parser.add_argument("--channel", default="", help="Keyword channel filter")
    parser.add_argument("--creator", help="Login to search tickets by")
    parser.add_argument("--max", type=int, default=10, help="Max search results")
    parser.add_argument("--ticket-id", help="Ticket ID to fetch")
    parser.add_argument("--create", action="store_true", help="Create a test ticket")
    parser.add_argument("--partner", help="Partner ID for --create")
    parser.add_argument("--keyword", help="Keyword for --create")
    parser.add_argument("--subject", default="Test Ticket", help="Subject for --create")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    async with DokuwebClient.from_settings() as client:
        try:
            await client.authenticate()
            logger.info("✅ Authenticated")

            keywords = await client.get_keywords(channel=args.channel)
            logger.info(f"✅ {len(keywords)} keywords")
            for kw in keywords[:5]:
                logger.info(f"   - {kw.get('KEYWORD')} ({kw.get('CATEGORY')})")

            if args.creator:
                tickets = await client.search_tickets_by_creator(args.creator, max_results=args.max)
                logger.info(f"✅ {len(tickets)} tickets created by {args.creator}")
                for ticket in tickets:
                    logger.info(f"   - {ticket.get('ticketnr')}: {ticket.get('subject')}")

            if args.ticket_id:
                ticket = await client.get_ticket_details(args.ticket_id)
                logger.info(f"✅ Ticket {args.ticket_id}: {ticket}")

            if args.create:
                if not (args.partner and args.keyword):
                    logger.error("--create needs --partner and --keyword")
                    return 2
                created = await client.create_ticket(args.subject, args.partner, args.keyword)
                logger.info(f"✅ Created ticket {created.ticketnr} (id {created.ticketid})")

        except DokuwebError as e:
            logger.error(f"❌ {e}")
            return 1

    return 0


def main(argv=None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
