# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from planboard.model.category import Category
from planboard.repository.id_map import ID_MAP_REPO
from planboard.view.views.header import header


def categories_view(categories: list[Category]) -> None:
    header("categories")

    categories_table = Table(box=box.SIMPLE)
    categories_table.add_column("id")
    categories_table.add_column("name")

    for category in sorted(categories, key=lambda category: category["name"].casefold()):
        name = category["name"]
        if category["color"] is not None:
            name = f"[{category['color']}]{name}[/{category['color']}]"
        categories_table.add_row(
            str(ID_MAP_REPO.associate_id("categories", cast(str, category["id"]))),
            name,
        )

    console = Console()
    console.print(categories_table)
