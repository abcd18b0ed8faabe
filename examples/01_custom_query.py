"""Example 1: Custom Query

Builds a query the library does not ship: each form's overall standing
next to its points in a single event. The standings and the event results
are fetched through the same cache as the built-in queries, so running the
script twice only hits the Sheets API once.

Requires SPORTSDAY_API_KEY and SPORTSDAY_SHEET_ID in the environment or .env.
"""

import asyncio

from sportsday import open_api
from sportsday.config import get_settings


async def main(event: str = "longJump", year_group: int = 7) -> None:
    settings = get_settings()

    async with open_api(settings) as api:
        query = (
            api.new_pipeline()
            .add(lambda _: api.get_summary_standings())
            .add(lambda _: api.get_event_results(event, year_group))
            .add(lambda out: [
                (s.form, s.year_pos, next((r.pts for r in out[1].total if r.letter == s.form), None))
                for s in out[0]
                if s.year == year_group
            ])
        )
        rows = await query.run()

    print(f"{'Form':<10}{'Year pos':>10}{event + ' pts':>16}")
    for form, year_pos, pts in rows:
        print(f"{form:<10}{year_pos!s:>10}{pts!s:>16}")


if __name__ == "__main__":
    asyncio.run(main())
