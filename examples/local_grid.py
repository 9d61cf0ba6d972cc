"""
Example driving a grid over an in-memory collection.

This shows the calls a presentation layer makes: set an intent, render,
then read the page, the page buttons and the sort indicator back.
"""

import asyncio

from pagegrid import GridController

employees = [
    {"id": 1, "name": "Alice", "team": {"name": "Platform"}, "city": "Berlin"},
    {"id": 2, "name": "Bob", "team": {"name": "Billing"}, "city": "Lisbon"},
    {"id": 3, "name": "Carla", "team": {"name": "Platform"}, "city": "Berlin"},
    {"id": 4, "name": "Dmitri", "team": {"name": "Search"}, "city": "Tallinn"},
    {"id": 5, "name": "Eve", "team": {"name": "Billing"}, "city": "Berlin"},
    {"id": 6, "name": "Farid", "team": {"name": "Search"}, "city": "Lisbon"},
    {"id": 7, "name": "Gita", "team": {"name": "Platform"}, "city": "Tallinn"},
]


def show(grid: GridController) -> None:
    for record in grid.get_data():
        print(f"   - {record['id']}: {record['name']} ({record['team']['name']}, {record['city']})")
    print(f"   pages: {grid.get_pages()} (page {grid.get_page_index()} of {grid.get_total_pages()})")


async def main() -> None:
    grid = GridController({"data": employees, "defaultPageSize": 3, "pageButtonCount": 3})

    print("1. First page, columns inferred from the first record:")
    await grid.render()
    print(f"   columns: {[column.name for column in grid.get_columns()]}")
    show(grid)

    print("\n2. Second page:")
    grid.set_page_index(2)
    await grid.render()
    show(grid)

    print("\n3. Filter by nested team name (back to page 1):")
    grid.set_filter("team.name", "plat")
    await grid.render()
    show(grid)

    print("\n4. Click the 'name' heading twice:")
    grid.sort_by("name")
    grid.sort_by("name")
    await grid.render()
    print(f"   sorted by name desc: {grid.is_sorted_by('name', 'desc')}")
    show(grid)

    print("\n5. Clear the filter:")
    grid.clear_filter("team.name")
    await grid.render()
    show(grid)


if __name__ == "__main__":
    asyncio.run(main())

    print("\n" + "=" * 80)
    print("Local grid example completed!")
    print("=" * 80)
